"""JSON output formatter — the stable report artifact for downstream consumers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from loan_compliance.models import ComplianceReport


class JSONFormatter:
    """Renders a ComplianceReport as indented JSON bytes using the published field names."""

    def __init__(self, indent: int | None = 2) -> None:
        self._indent = indent

    def format(self, report: ComplianceReport, **kwargs: Any) -> bytes:
        """Serialize *report* to JSON bytes (``location.pageNumber`` etc. by alias)."""
        return report.model_dump_json(by_alias=True, indent=self._indent).encode()

    def format_to_file(self, report: ComplianceReport, path: Path, **kwargs: Any) -> Path:
        """Write JSON to *path* and return it."""
        path.write_bytes(self.format(report, **kwargs))
        return path

    @property
    def content_type(self) -> str:
        return "application/json"
