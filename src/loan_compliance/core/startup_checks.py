"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loan_compliance.core.config import AppSettings

log = logging.getLogger(__name__)

# Providers that use IAM/local auth and do not require an API key
_NO_KEY_PROVIDERS = frozenset({"bedrock", "ollama"})


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_api_key(settings)
    _check_segmentation(settings)


def _check_api_key(settings: AppSettings) -> None:
    """Reject placeholder API keys for providers that need real ones."""
    if settings.llm.provider not in _NO_KEY_PROVIDERS:
        if settings.llm.api_key in ("no-key", ""):
            raise ValueError(
                f"COMPLIANCE_LLM_API_KEY is required for provider '{settings.llm.provider}'. "
                f"Set it via environment variable or the --api-key option."
            )


def _check_segmentation(settings: AppSettings) -> None:
    """Warn when the heading rule can never fire."""
    seg = settings.segmentation
    if seg.font_ratio < 1.0:
        log.warning(
            "COMPLIANCE_SEGMENTATION_FONT_RATIO=%.2f is below 1.0; every font change "
            "that is not smaller will start a new section.",
            seg.font_ratio,
        )
    if seg.heading_min_font_size < seg.default_font_size:
        log.warning(
            "Heading font threshold %.1f is below the default font size %.1f; "
            "short unstyled text will classify as headings.",
            seg.heading_min_font_size,
            seg.default_font_size,
        )
