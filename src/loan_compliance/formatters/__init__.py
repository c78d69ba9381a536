"""Report output formatters."""

from __future__ import annotations

from loan_compliance.formatters.json_formatter import JSONFormatter
from loan_compliance.formatters.protocols import IOutputFormatter

__all__ = ["IOutputFormatter", "JSONFormatter"]
