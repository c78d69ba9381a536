"""Compliance analyzer: prompt → analysis service → sanitized, validated report."""

from __future__ import annotations

import asyncio
import logging

from loan_compliance.analysis.errors import classify_failure
from loan_compliance.analysis.report import ReportBuilder
from loan_compliance.analysis.sanitizer import sanitize_response
from loan_compliance.core.config import PromptConfig, ReportConfig
from loan_compliance.hooks.run_tracker import track_stage
from loan_compliance.inference.protocols import IAnalysisBackend
from loan_compliance.models import ComplianceReport, DocumentAnalysis
from loan_compliance.prompts.builder import build_analysis_prompt

log = logging.getLogger(__name__)


class ComplianceAnalyzer:
    """Drives one analysis request per document.

    Every failure after the document is assembled surfaces as exactly one
    :class:`~loan_compliance.exceptions.AnalysisError` subclass.  The cause
    is chained and logged; its text never reaches ``user_message``.  Nothing
    is retried here.

    Args:
        backend: The external analysis service.
        prompt_config: Section truncation settings.
        report_config: Document type and severity weights.
        timeout: Optional seconds to wait for the service before failing
            with ``NetworkError``.
    """

    def __init__(
        self,
        backend: IAnalysisBackend,
        *,
        prompt_config: PromptConfig | None = None,
        report_config: ReportConfig | None = None,
        timeout: float | None = None,
    ) -> None:
        self._backend = backend
        self._prompt_config = prompt_config or PromptConfig()
        self._builder = ReportBuilder(report_config)
        self._timeout = timeout

    async def analyze(self, document: DocumentAnalysis) -> ComplianceReport:
        try:
            with track_stage("prompt"):
                prompt = build_analysis_prompt(document, self._prompt_config.section_max_chars)

            with track_stage("inference"):
                raw = await self._request(prompt)

            with track_stage("report"):
                payload = sanitize_response(raw)
                return self._builder.build(payload, document.filename)

        except Exception as exc:
            error = classify_failure(exc)
            if error is exc:
                raise
            log.error(
                "Analysis of %s failed as %s: %s: %s",
                document.filename,
                type(error).__name__,
                type(exc).__name__,
                exc,
            )
            raise error from exc

    async def _request(self, prompt: str) -> str:
        if self._timeout is None:
            return await self._backend.complete(prompt)
        return await asyncio.wait_for(self._backend.complete(prompt), timeout=self._timeout)
