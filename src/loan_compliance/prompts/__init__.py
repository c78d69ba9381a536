"""Prompt management: registry and domain-specific templates."""

from __future__ import annotations

from loan_compliance.prompts.builder import build_analysis_prompt
from loan_compliance.prompts.registry import get_prompt

__all__ = ["build_analysis_prompt", "get_prompt"]
