"""Report synthesis: sanitize, validate and aggregate the analysis service's answer."""

from __future__ import annotations

from loan_compliance.analysis.analyzer import ComplianceAnalyzer
from loan_compliance.analysis.errors import classify_failure
from loan_compliance.analysis.report import (
    ReportBuilder,
    compute_compliance_score,
    count_categories,
    summarize_issues,
)
from loan_compliance.analysis.sanitizer import sanitize_response

__all__ = [
    "ComplianceAnalyzer",
    "ReportBuilder",
    "classify_failure",
    "compute_compliance_score",
    "count_categories",
    "sanitize_response",
    "summarize_issues",
]
