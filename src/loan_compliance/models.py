"""Pydantic data models for loan-compliance-checker.

Document-side models (``Token``, ``Section``, ``DocumentAnalysis``) describe
the reconstructed structure of the input PDF.  Report-side models
(``ComplianceIssue``, ``ComplianceReport``) are the produced artifact; they
serialize by alias so the emitted JSON keeps the published field names
(``location.pageNumber``, ``documentId``, ...).
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# ── Document / section models ────────────────────────────────────────


class Token(BaseModel):
    """A single normalized text run with its page position."""

    model_config = ConfigDict(frozen=True)

    text: str
    x: float
    y: float
    font_size: float


class BoundingBox(BaseModel):
    """Smallest box containing every token absorbed into a section."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


class SectionType(str, Enum):
    """Logical section kinds.  ``TABLE`` is reserved for an external detector."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    TABLE = "table"


class Section(BaseModel):
    """A contiguous run of text sharing visual grouping on one page."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: SectionType = SectionType.PARAGRAPH
    content: str
    page_number: int = Field(alias="pageNumber", ge=1)
    bounding_box: BoundingBox = Field(default_factory=BoundingBox, alias="boundingBox")


class DocumentMetadata(BaseModel):
    """Best-effort document info; only ``title`` is always present."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    author: Optional[str] = None
    creation_date: Optional[str] = Field(default=None, alias="creationDate")
    modification_date: Optional[str] = Field(default=None, alias="modificationDate")


class DocumentAnalysis(BaseModel):
    """The assembled structure of one input document.

    ``sections`` are in page order, then top-to-bottom insertion order
    within a page.  That order is the order fed to the analysis prompt.
    """

    model_config = ConfigDict(populate_by_name=True)

    document_id: str = Field(alias="documentId")
    filename: str
    total_pages: int = Field(alias="totalPages", ge=0)
    sections: list[Section] = Field(default_factory=list)
    metadata: DocumentMetadata


# ── Compliance report models ─────────────────────────────────────────


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RegulationCategory(str, Enum):
    """Regulations the analysis service is asked to evaluate."""

    TILA = "TILA"
    ESIGN = "ESIGN"
    UDAAP = "UDAAP"
    ECOA = "ECOA"


class IssueLocation(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page_number: int = Field(alias="pageNumber")
    section: str = ""
    excerpt: str = ""


class ComplianceIssue(BaseModel):
    """A single finding reported by the analysis service."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    severity: Severity
    category: RegulationCategory
    description: str
    regulation_reference: str
    suggested_fix: str
    location: IssueLocation


class ComplianceReportSummary(BaseModel):
    """Aggregate statistics; a pure function of the issue set."""

    model_config = ConfigDict(frozen=True)

    total_issues: int = Field(ge=0)
    high_severity: int = Field(ge=0)
    medium_severity: int = Field(ge=0)
    low_severity: int = Field(ge=0)
    compliance_score: int = Field(ge=0, le=100)


class CategoryCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    issues: int = Field(ge=0)


class ComplianceReport(BaseModel):
    """Terminal artifact of the pipeline."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    analysis_id: str
    timestamp: str
    filename: str
    document_type: str
    issues: list[ComplianceIssue] = Field(default_factory=list)
    summary: ComplianceReportSummary
    categories: list[CategoryCount] = Field(default_factory=list)


# ── Run analytics ────────────────────────────────────────────────────


class StageMetrics(BaseModel):
    """Timing for one pipeline stage."""

    stage: str
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    duration_ms: float = 0.0
    status: str = "running"


class RunAnalytics(BaseModel):
    """Per-document run record populated by ``hooks.run_tracker``."""

    run_id: str
    doc_id: str = ""
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    ended_at: Optional[datetime] = None
    total_duration_ms: float = 0.0
    status: str = "running"
    stages: list[StageMetrics] = Field(default_factory=list)

    def finalize(self) -> None:
        self.ended_at = datetime.now(timezone.utc)
        self.total_duration_ms = (self.ended_at - self.started_at).total_seconds() * 1000
        if self.status == "running":
            failed = any(s.status == "failed" for s in self.stages)
            self.status = "failed" if failed else "completed"
