"""Report validation and aggregation.

Turns a sanitized JSON payload into a ``ComplianceReport``: parse, validate
each issue against the enumerated schema, then derive the summary statistics
and per-category counts.  All aggregation helpers are pure.
"""

from __future__ import annotations

import json
import logging
import threading
import uuid
from collections import Counter
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from loan_compliance.core.config import ReportConfig
from loan_compliance.exceptions import ParseError, ShapeError
from loan_compliance.models import (
    CategoryCount,
    ComplianceIssue,
    ComplianceReport,
    ComplianceReportSummary,
    Severity,
)

log = logging.getLogger(__name__)

_clock_lock = threading.Lock()
_last_timestamp: datetime | None = None


def _monotonic_utc_now() -> datetime:
    """Current UTC instant, never earlier than the previous call in this process."""
    global _last_timestamp
    with _clock_lock:
        now = datetime.now(timezone.utc)
        if _last_timestamp is not None and now < _last_timestamp:
            now = _last_timestamp
        _last_timestamp = now
        return now


# ── Pure aggregation ─────────────────────────────────────────────────


def compute_compliance_score(
    high: int,
    medium: int,
    low: int,
    *,
    high_weight: int = 10,
    medium_weight: int = 5,
    low_weight: int = 2,
) -> int:
    """``max(100 - (high*10 + medium*5 + low*2), 0)`` with configurable weights."""
    penalty = high * high_weight + medium * medium_weight + low * low_weight
    return max(100 - penalty, 0)


def summarize_issues(
    issues: list[ComplianceIssue],
    config: ReportConfig | None = None,
) -> ComplianceReportSummary:
    cfg = config or ReportConfig()
    counts = Counter(issue.severity for issue in issues)
    high = counts[Severity.HIGH]
    medium = counts[Severity.MEDIUM]
    low = counts[Severity.LOW]
    return ComplianceReportSummary(
        total_issues=len(issues),
        high_severity=high,
        medium_severity=medium,
        low_severity=low,
        compliance_score=compute_compliance_score(
            high,
            medium,
            low,
            high_weight=cfg.high_weight,
            medium_weight=cfg.medium_weight,
            low_weight=cfg.low_weight,
        ),
    )


def count_categories(issues: list[ComplianceIssue]) -> list[CategoryCount]:
    """One entry per distinct category, in first-seen order."""
    counts: dict[str, int] = {}
    for issue in issues:
        key = issue.category.value
        counts[key] = counts.get(key, 0) + 1
    return [CategoryCount(category=cat, issues=n) for cat, n in counts.items()]


# ── Parsing / validation ─────────────────────────────────────────────


def parse_payload(payload: str) -> Any:
    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Response is not valid JSON: {exc.msg}", raw_response=payload) from exc


def validate_issues(parsed: Any, raw: str = "") -> list[ComplianceIssue]:
    """Check the top-level shape and validate every issue.

    Raises:
        ShapeError: If ``issues`` is missing or not an array, or any issue has
            a field outside the schema (unknown severity or category included).
    """
    if not isinstance(parsed, dict):
        raise ShapeError("Response payload is not a JSON object", raw_response=raw)

    raw_issues = parsed.get("issues")
    if not isinstance(raw_issues, list):
        raise ShapeError("issues is not an array", raw_response=raw)

    issues: list[ComplianceIssue] = []
    for index, item in enumerate(raw_issues):
        try:
            issues.append(ComplianceIssue.model_validate(item))
        except ValidationError as exc:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) or "<root>" for err in exc.errors())
            raise ShapeError(f"issues[{index}] is invalid ({fields})", raw_response=raw) from exc
    return issues


class ReportBuilder:
    """Build a ``ComplianceReport`` from a sanitized payload."""

    def __init__(self, config: ReportConfig | None = None) -> None:
        self._config = config or ReportConfig()

    def build(self, payload: str, filename: str) -> ComplianceReport:
        parsed = parse_payload(payload)
        issues = validate_issues(parsed, raw=payload)
        summary = summarize_issues(issues, self._config)

        log.info(
            "Report for %s: %d issues (high=%d medium=%d low=%d) score=%d",
            filename,
            summary.total_issues,
            summary.high_severity,
            summary.medium_severity,
            summary.low_severity,
            summary.compliance_score,
        )

        return ComplianceReport(
            analysis_id=str(uuid.uuid4()),
            timestamp=_monotonic_utc_now().isoformat(),
            filename=filename,
            document_type=self._config.document_type,
            issues=issues,
            summary=summary,
            categories=count_categories(issues),
        )
