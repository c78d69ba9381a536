"""Render an assembled document into the compliance analysis request."""

from __future__ import annotations

from loan_compliance.models import DocumentAnalysis
from loan_compliance.prompts.registry import get_prompt

DEFAULT_SECTION_MAX_CHARS = 500


def build_analysis_prompt(
    document: DocumentAnalysis,
    section_max_chars: int = DEFAULT_SECTION_MAX_CHARS,
) -> str:
    """Build the analysis prompt for *document*.

    Every section contributes ``Page {n}: {content}`` with content cut to
    *section_max_chars*.  This bounds prompt size only; the service is told
    sections may be truncated.
    """
    line_template = get_prompt("loan", "analysis", "SECTION_LINE")
    lines = [
        line_template.format(
            page_number=section.page_number,
            content=section.content[:section_max_chars],
        )
        for section in document.sections
    ]

    return get_prompt("loan", "analysis", "ANALYSIS_PROMPT").format(
        filename=document.filename,
        total_pages=document.total_pages,
        section_max_chars=section_max_chars,
        sections="\n\n".join(lines),
    )
