"""loan-compliance-checker: section reconstruction and LLM compliance review for loan PDFs.

Public API::

    from loan_compliance import (
        AppSettings,
        ComplianceService, ComplianceAnalyzer, DocumentAssembler, SectionSegmenter,
        DocumentAnalysis, Section, ComplianceReport, ComplianceIssue,
        build_analysis_prompt, sanitize_response, ReportBuilder,
    )
"""

from __future__ import annotations

from loan_compliance.analysis.analyzer import ComplianceAnalyzer
from loan_compliance.analysis.errors import classify_failure
from loan_compliance.analysis.report import ReportBuilder
from loan_compliance.analysis.sanitizer import sanitize_response
from loan_compliance.core.config import AppSettings
from loan_compliance.exceptions import (
    AnalysisError,
    AuthError,
    ComplianceError,
    ExtractionError,
    MalformedResponseError,
    NetworkError,
    ParseError,
    RateLimitError,
    ResponseFormatError,
    ShapeError,
    UnknownAnalysisError,
)
from loan_compliance.extraction.assembler import DocumentAssembler
from loan_compliance.extraction.segmenter import SectionSegmenter
from loan_compliance.models import (
    BoundingBox,
    ComplianceIssue,
    ComplianceReport,
    ComplianceReportSummary,
    DocumentAnalysis,
    DocumentMetadata,
    RegulationCategory,
    Section,
    SectionType,
    Severity,
    Token,
)
from loan_compliance.prompts.builder import build_analysis_prompt
from loan_compliance.services.compliance_service import ComplianceService

__all__ = [
    "AppSettings",
    # Models
    "Token",
    "BoundingBox",
    "Section",
    "SectionType",
    "DocumentMetadata",
    "DocumentAnalysis",
    "Severity",
    "RegulationCategory",
    "ComplianceIssue",
    "ComplianceReportSummary",
    "ComplianceReport",
    # Pipeline
    "SectionSegmenter",
    "DocumentAssembler",
    "build_analysis_prompt",
    "sanitize_response",
    "ReportBuilder",
    "classify_failure",
    "ComplianceAnalyzer",
    "ComplianceService",
    # Errors
    "ComplianceError",
    "ExtractionError",
    "MalformedResponseError",
    "ParseError",
    "ShapeError",
    "AnalysisError",
    "NetworkError",
    "RateLimitError",
    "AuthError",
    "ResponseFormatError",
    "UnknownAnalysisError",
]
