"""Tests for the compliance analysis prompt."""

from __future__ import annotations

import pytest

from loan_compliance.models import DocumentAnalysis, DocumentMetadata, Section
from loan_compliance.prompts.builder import build_analysis_prompt
from loan_compliance.prompts.registry import get_prompt, reset


def _doc(*contents: tuple[int, str]) -> DocumentAnalysis:
    return DocumentAnalysis(
        document_id="d1",
        filename="agreement.pdf",
        total_pages=3,
        sections=[Section(content=c, page_number=p) for p, c in contents],
        metadata=DocumentMetadata(title="agreement.pdf"),
    )


class TestBuildAnalysisPrompt:
    def test_header_fields(self, sample_document) -> None:
        prompt = build_analysis_prompt(sample_document)
        assert "Document: loan.pdf" in prompt
        assert "Total Pages: 2" in prompt

    def test_sections_rendered_in_order_with_blank_lines(self) -> None:
        prompt = build_analysis_prompt(_doc((1, "Alpha"), (1, "Beta"), (3, "Gamma")))
        assert "Page 1: Alpha\n\nPage 1: Beta\n\nPage 3: Gamma" in prompt

    def test_section_content_truncated_to_500_chars(self) -> None:
        content = "A" * 499 + "B" + "C" * 100
        prompt = build_analysis_prompt(_doc((1, content)))
        assert "Page 1: " + "A" * 499 + "B\n" in prompt
        assert "C" * 100 not in prompt

    def test_custom_truncation(self) -> None:
        prompt = build_analysis_prompt(_doc((1, "abcdefghij")), section_max_chars=4)
        assert "Page 1: abcd\n" in prompt
        assert "abcde" not in prompt
        assert "truncated to its first 4 characters" in prompt

    @pytest.mark.parametrize(
        "fragment",
        [
            "1. TILA (Truth in Lending Act)",
            "2. ESIGN Act",
            "3. UDAAP (Unfair, Deceptive, or Abusive Acts or Practices)",
            "4. ECOA (Equal Credit Opportunity Act)",
        ],
    )
    def test_lists_regulations(self, sample_document, fragment: str) -> None:
        assert fragment in build_analysis_prompt(sample_document)

    def test_output_schema_is_literal_json(self, sample_document) -> None:
        prompt = build_analysis_prompt(sample_document)
        assert '"severity": "high|medium|low"' in prompt
        assert '"category": "TILA|ESIGN|UDAAP|ECOA"' in prompt
        assert '"pageNumber": number' in prompt
        assert '"issues": [{' in prompt
        assert "{{" not in prompt

    def test_braces_in_content_survive(self) -> None:
        prompt = build_analysis_prompt(_doc((1, "Fee {amount} applies")))
        assert "Page 1: Fee {amount} applies" in prompt

    def test_empty_document(self) -> None:
        prompt = build_analysis_prompt(_doc())
        assert "Total Pages: 3" in prompt
        assert "Page " not in prompt.split("Analyze for compliance")[0].split("Content to analyze")[1]

    def test_pure(self, sample_document) -> None:
        assert build_analysis_prompt(sample_document) == build_analysis_prompt(sample_document)


class TestPromptRegistry:
    def test_unknown_prompt_raises_key_error(self) -> None:
        with pytest.raises(KeyError):
            get_prompt("loan", "analysis", "NOPE")

    def test_unknown_module_raises_key_error(self) -> None:
        with pytest.raises(KeyError, match="Prompt module not found"):
            get_prompt("mortgage", "analysis", "ANALYSIS_PROMPT")

    def test_reset_reloads_templates(self) -> None:
        first = get_prompt("loan", "analysis", "SECTION_LINE")
        reset()
        assert get_prompt("loan", "analysis", "SECTION_LINE") == first
