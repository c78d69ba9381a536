"""Pluggable analysis backends (external LLM service)."""

from __future__ import annotations

from loan_compliance.inference.factory import create_analysis_backend
from loan_compliance.inference.protocols import IAnalysisBackend
from loan_compliance.inference.realtime import LiteLLMBackend

__all__ = ["IAnalysisBackend", "LiteLLMBackend", "create_analysis_backend"]
