"""Nested pydantic-settings configuration for the application.

Each group reads its own ``COMPLIANCE_<GROUP>_*`` env vars::

    export COMPLIANCE_LLM_MODEL=gemini/gemini-pro
    export COMPLIANCE_LLM_API_KEY=...
    export COMPLIANCE_SEGMENTATION_LINE_GAP=24
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class LLMConfig(BaseSettings):
    """Analysis service (LLM) configuration.

    Env vars use ``COMPLIANCE_LLM_`` prefix.  ``inference_backend`` is either
    ``"litellm"`` or a dotted path ``package.module:ClassName``.
    """

    model_config = {"env_prefix": "COMPLIANCE_LLM_"}

    provider: Literal["gemini", "openai", "anthropic", "bedrock", "ollama", "litellm"] = "gemini"
    model: str = "gemini/gemini-pro"
    api_key: str = "no-key"
    base_url: str = ""
    temperature: float = 0.0
    timeout: float = 120.0
    inference_backend: str = "litellm"


class SegmentationConfig(BaseSettings):
    """Spatial/typographic section-boundary heuristics.

    These are page-geometry-dependent policy values, not document-derived:
    unusual page sizes or typefaces may mis-segment with the defaults.

    Env vars use ``COMPLIANCE_SEGMENTATION_`` prefix.
    """

    model_config = {"env_prefix": "COMPLIANCE_SEGMENTATION_"}

    line_gap: float = Field(default=20.0, gt=0.0)
    font_ratio: float = Field(default=1.2, gt=0.0)
    width_factor: float = Field(default=0.6, gt=0.0)
    heading_max_chars: int = Field(default=50, ge=1)
    heading_min_font_size: float = Field(default=14.0, gt=0.0)
    default_font_size: float = Field(default=12.0, gt=0.0)


class PromptConfig(BaseSettings):
    """Prompt rendering configuration.

    Env vars use ``COMPLIANCE_PROMPT_`` prefix.
    """

    model_config = {"env_prefix": "COMPLIANCE_PROMPT_"}

    section_max_chars: int = Field(default=500, ge=1)


class ReportConfig(BaseSettings):
    """Report aggregation configuration.

    Env vars use ``COMPLIANCE_REPORT_`` prefix.
    """

    model_config = {"env_prefix": "COMPLIANCE_REPORT_"}

    document_type: str = "Personal Loan Agreement"
    high_weight: int = Field(default=10, ge=0)
    medium_weight: int = Field(default=5, ge=0)
    low_weight: int = Field(default=2, ge=0)


class ObservabilityConfig(BaseSettings):
    """Observability configuration.

    Env vars use ``COMPLIANCE_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "COMPLIANCE_OBSERVABILITY_"}

    log_level: str = "INFO"
    json_logs: bool | None = None


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    # factories so each AppSettings() re-reads the environment
    llm: LLMConfig = Field(default_factory=LLMConfig)
    segmentation: SegmentationConfig = Field(default_factory=SegmentationConfig)
    prompt: PromptConfig = Field(default_factory=PromptConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
