"""Integration tests: real PDFs through extraction, analysis, and reporting."""

from __future__ import annotations

import asyncio
import json

import pytest

from loan_compliance.core.config import AppSettings, LLMConfig
from loan_compliance.exceptions import ExtractionError, ResponseFormatError
from loan_compliance.extraction.assembler import DocumentAssembler
from loan_compliance.extraction.pymupdf_source import open_pdf, open_pdf_path
from loan_compliance.models import SectionType
from loan_compliance.services.compliance_service import ComplianceService
from tests.fakes.fake_analysis import FakeAnalysisBackend
from tests.fakes.payloads import make_issue
from tests.fakes.pdf_builder import LOAN_AGREEMENT, make_pdf

pytestmark = pytest.mark.integration


@pytest.fixture
def loan_pdf() -> bytes:
    return make_pdf(LOAN_AGREEMENT, title="Loan 2024-17", author="Acme Lending")


def _service(backend: FakeAnalysisBackend) -> ComplianceService:
    settings = AppSettings(llm=LLMConfig(api_key="test-key"))
    return ComplianceService(settings, backend=backend)


class TestPyMuPDFTokenSource:
    @pytest.mark.asyncio
    async def test_page_content_carries_positions_and_sizes(self, loan_pdf) -> None:
        with open_pdf(loan_pdf) as source:
            assert source.page_count == 2
            content = await source.get_page_content(1)

        texts = [item.text for item in content.items]
        assert texts[0] == "Personal Loan Agreement"
        first = content.items[0]
        assert first.transform[4] == pytest.approx(72, abs=1)
        assert first.transform[5] == pytest.approx(72, abs=1)
        assert content.styles[first.font_name]["fontSize"] == pytest.approx(18)

    @pytest.mark.asyncio
    async def test_page_out_of_range(self, loan_pdf) -> None:
        with open_pdf(loan_pdf) as source:
            with pytest.raises(ExtractionError, match="out of range"):
                await source.get_page_content(3)

    @pytest.mark.asyncio
    async def test_metadata_uses_info_keys(self, loan_pdf) -> None:
        with open_pdf(loan_pdf) as source:
            meta = await source.get_metadata()
        assert meta["Title"] == "Loan 2024-17"
        assert meta["Author"] == "Acme Lending"

    def test_invalid_bytes_rejected(self) -> None:
        with pytest.raises(ExtractionError):
            open_pdf(b"this is not a pdf at all")

    def test_empty_bytes_rejected(self) -> None:
        with pytest.raises(ExtractionError, match="empty"):
            open_pdf(b"")

    def test_password_protected_rejected(self) -> None:
        data = make_pdf(LOAN_AGREEMENT, user_password="secret")
        with pytest.raises(ExtractionError, match="password"):
            open_pdf(data)

    def test_missing_path_rejected(self, tmp_path) -> None:
        with pytest.raises(ExtractionError, match="Cannot read"):
            open_pdf_path(tmp_path / "missing.pdf")


class TestAssembly:
    @pytest.mark.asyncio
    async def test_sections_reconstructed(self, loan_pdf) -> None:
        with open_pdf(loan_pdf) as source:
            document = await DocumentAssembler().assemble(source, "loan.pdf")

        assert document.total_pages == 2
        assert [(s.page_number, s.content) for s in document.sections] == [
            (1, "Personal Loan Agreement"),
            (1, "This agreement is made between Lender and Borrower. The Borrower agrees to repay."),
            (1, "1. Annual Percentage Rate: 24.99%"),
            (2, "Electronic Signatures"),
            (2, "You consent to electronic records."),
        ]
        assert document.sections[2].type == SectionType.LIST
        assert document.metadata.title == "Loan 2024-17"
        assert document.metadata.author == "Acme Lending"

    @pytest.mark.asyncio
    async def test_blank_pages_count_but_add_no_sections(self) -> None:
        data = make_pdf([[], [("Only text", 100, 12)], []])
        with open_pdf(data) as source:
            document = await DocumentAssembler().assemble(source, "sparse.pdf")
        assert document.total_pages == 3
        assert [(s.page_number, s.content) for s in document.sections] == [(2, "Only text")]
        assert document.metadata.title == "sparse.pdf"


class TestCompliancePipeline:
    @pytest.mark.asyncio
    async def test_check_pdf_end_to_end(self, loan_pdf) -> None:
        payload = json.dumps(
            {
                "issues": [
                    make_issue("high", "TILA"),
                    make_issue("medium", "ESIGN", 2),
                    make_issue("low", "TILA"),
                ]
            }
        )
        backend = FakeAnalysisBackend(responses=[f"Here you go:\n```json\n{payload}\n```"])
        report = await _service(backend).check_pdf(loan_pdf, "loan.pdf")

        assert report.filename == "loan.pdf"
        assert report.summary.compliance_score == 100 - (10 + 5 + 2)
        assert [(c.category, c.issues) for c in report.categories] == [("TILA", 2), ("ESIGN", 1)]

        prompt = backend.prompts[0]
        assert "Document: loan.pdf" in prompt
        assert "Total Pages: 2" in prompt
        assert "Page 1: 1. Annual Percentage Rate: 24.99%" in prompt
        assert "Page 2: You consent to electronic records." in prompt

    @pytest.mark.asyncio
    async def test_check_file(self, tmp_path, loan_pdf) -> None:
        path = tmp_path / "agreement.pdf"
        path.write_bytes(loan_pdf)
        report = await _service(FakeAnalysisBackend()).check_file(path)
        assert report.filename == "agreement.pdf"
        assert report.summary.compliance_score == 100

    @pytest.mark.asyncio
    async def test_extraction_failure_skips_analysis(self) -> None:
        backend = FakeAnalysisBackend()
        with pytest.raises(ExtractionError):
            await _service(backend).check_pdf(b"definitely not a pdf", "broken.pdf")
        assert backend.prompts == []

    @pytest.mark.asyncio
    async def test_unusable_response_classified(self, loan_pdf) -> None:
        backend = FakeAnalysisBackend(responses=["I am unable to review documents."])
        with pytest.raises(ResponseFormatError):
            await _service(backend).check_pdf(loan_pdf, "loan.pdf")

    @pytest.mark.asyncio
    async def test_concurrent_documents(self, loan_pdf) -> None:
        service = _service(FakeAnalysisBackend())
        reports = await asyncio.gather(
            service.check_pdf(loan_pdf, "a.pdf"),
            service.check_pdf(loan_pdf, "b.pdf"),
        )
        assert [r.filename for r in reports] == ["a.pdf", "b.pdf"]
        assert reports[0].analysis_id != reports[1].analysis_id
