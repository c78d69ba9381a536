"""Application services."""

from __future__ import annotations

from loan_compliance.services.compliance_service import ComplianceService

__all__ = ["ComplianceService"]
