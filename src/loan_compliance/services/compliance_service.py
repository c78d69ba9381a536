"""Compliance service: orchestrates document assembly and report synthesis."""

from __future__ import annotations

import logging
from pathlib import Path

from loan_compliance.analysis.analyzer import ComplianceAnalyzer
from loan_compliance.core.config import AppSettings
from loan_compliance.exceptions import ExtractionError
from loan_compliance.extraction.assembler import DocumentAssembler
from loan_compliance.extraction.protocols import ITokenSource
from loan_compliance.extraction.pymupdf_source import open_pdf
from loan_compliance.hooks.run_tracker import end_run, start_run, track_stage
from loan_compliance.inference.factory import create_analysis_backend
from loan_compliance.inference.protocols import IAnalysisBackend
from loan_compliance.models import ComplianceReport, DocumentAnalysis

log = logging.getLogger(__name__)


class ComplianceService:
    """Extract a loan document's structure, then analyze it for compliance.

    Extraction failures (``ExtractionError``) abort before any service call.
    Analysis failures surface as one classified ``AnalysisError``.  The
    service keeps no per-document state, so one instance may serve
    concurrent documents.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        backend: IAnalysisBackend | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._assembler = DocumentAssembler(self._settings.segmentation)
        self._analyzer = ComplianceAnalyzer(
            backend or create_analysis_backend(self._settings),
            prompt_config=self._settings.prompt,
            report_config=self._settings.report,
            timeout=self._settings.llm.timeout,
        )

    async def extract_pdf(self, data: bytes, filename: str) -> DocumentAnalysis:
        """Assemble the section structure of an in-memory PDF."""
        with open_pdf(data) as source:
            return await self._assembler.assemble(source, filename)

    async def check(self, source: ITokenSource, filename: str) -> ComplianceReport:
        """Run the full pipeline over an already-open token source."""
        start_run(doc_id=filename)
        try:
            with track_stage("extraction"):
                document = await self._assembler.assemble(source, filename)
            return await self._analyzer.analyze(document)
        finally:
            self._log_run(filename)

    async def check_pdf(self, data: bytes, filename: str) -> ComplianceReport:
        start_run(doc_id=filename)
        try:
            with track_stage("extraction"):
                document = await self.extract_pdf(data, filename)
            return await self._analyzer.analyze(document)
        finally:
            self._log_run(filename)

    async def check_file(self, path: str | Path) -> ComplianceReport:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ExtractionError(f"Cannot read document {path}") from exc
        return await self.check_pdf(data, path.name)

    @staticmethod
    def _log_run(filename: str) -> None:
        analytics = end_run()
        if analytics is None:
            return
        log.info(
            "Compliance run %s for %s %s in %.0fms (%s)",
            analytics.run_id,
            filename,
            analytics.status,
            analytics.total_duration_ms,
            ", ".join(f"{s.stage}={s.duration_ms:.0f}ms" for s in analytics.stages),
        )
