"""Shared fixtures for loan-compliance-checker tests."""

from __future__ import annotations

import json
import os

import pytest

from loan_compliance.core.config import AppSettings, LLMConfig
from loan_compliance.models import (
    BoundingBox,
    DocumentAnalysis,
    DocumentMetadata,
    Section,
    SectionType,
)
from tests.fakes.payloads import make_issue

# keep litellm from fetching its model cost map over the network on import
os.environ.setdefault("LITELLM_LOCAL_MODEL_COST_MAP", "True")


@pytest.fixture
def settings() -> AppSettings:
    """Default test settings (fake key, no real LLM)."""
    return AppSettings(llm=LLMConfig(provider="gemini", api_key="test-key", model="gemini/test-model"))


@pytest.fixture
def sample_document() -> DocumentAnalysis:
    """Two-page loan agreement, already segmented."""
    sections = [
        Section(
            type=SectionType.HEADING,
            content="Personal Loan Agreement",
            page_number=1,
            bounding_box=BoundingBox(x=72, y=60, width=300, height=0),
        ),
        Section(
            type=SectionType.PARAGRAPH,
            content=(
                "This agreement is made between the Lender and the Borrower named below. "
                "The Borrower agrees to repay the principal with interest."
            ),
            page_number=1,
        ),
        Section(type=SectionType.LIST, content="1. Annual Percentage Rate: 24.99%", page_number=1),
        Section(type=SectionType.HEADING, content="Electronic Signatures", page_number=2),
        Section(
            type=SectionType.PARAGRAPH,
            content="By signing electronically you consent to receive disclosures electronically.",
            page_number=2,
        ),
    ]
    return DocumentAnalysis(
        document_id="doc-001",
        filename="loan.pdf",
        total_pages=2,
        sections=sections,
        metadata=DocumentMetadata(title="loan.pdf"),
    )


@pytest.fixture
def mixed_payload() -> str:
    """3 high, 2 medium, 1 low across three categories (TILA first)."""
    issues = [
        make_issue("high", "TILA"),
        make_issue("medium", "ESIGN", 2),
        make_issue("high", "TILA"),
        make_issue("low", "UDAAP"),
        make_issue("medium", "TILA"),
        make_issue("high", "ESIGN", 2),
    ]
    return json.dumps({"issues": issues})
