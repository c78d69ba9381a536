"""Document structure extraction: tokens → sections → ``DocumentAnalysis``."""

from __future__ import annotations

from loan_compliance.extraction.assembler import DocumentAssembler
from loan_compliance.extraction.protocols import ITokenSource, PageTextContent, RawTextItem
from loan_compliance.extraction.segmenter import SectionSegmenter, classify_section
from loan_compliance.extraction.tokens import normalize_page, normalize_token

__all__ = [
    "DocumentAssembler",
    "ITokenSource",
    "PageTextContent",
    "RawTextItem",
    "SectionSegmenter",
    "classify_section",
    "normalize_page",
    "normalize_token",
]
