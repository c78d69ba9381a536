"""Output formatter protocol — defines the contract all report formatters implement."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from loan_compliance.models import ComplianceReport


@runtime_checkable
class IOutputFormatter(Protocol):
    """Protocol for compliance report formatters (JSON, HTML, ...)."""

    def format(self, report: ComplianceReport, **kwargs: Any) -> bytes:
        """Render the report into output bytes."""
        ...

    def format_to_file(self, report: ComplianceReport, path: Path, **kwargs: Any) -> Path:
        """Render and write to a file. Returns the output path."""
        ...

    @property
    def content_type(self) -> str:
        """MIME type for the output format (e.g. 'application/json')."""
        ...


__all__ = ["IOutputFormatter"]
