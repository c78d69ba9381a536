"""Token normalization: raw engine text runs → uniform ``Token`` values."""

from __future__ import annotations

from typing import Any

from loan_compliance.exceptions import ExtractionError
from loan_compliance.extraction.protocols import PageTextContent, RawTextItem
from loan_compliance.models import Token

DEFAULT_FONT_SIZE = 12.0


def normalize_token(
    item: RawTextItem,
    styles: dict[str, dict[str, Any]],
    default_font_size: float = DEFAULT_FONT_SIZE,
) -> Token:
    """Convert one raw text run to ``(text, x, y, font_size)``.

    Position comes from ``transform[4]`` / ``transform[5]``.  Font size is
    looked up by font name in *styles*; a missing style or a non-positive
    size falls back to *default_font_size*.
    """
    if len(item.transform) < 6:
        raise ExtractionError(
            f"Text item {item.text[:30]!r} has a {len(item.transform)}-entry transform, expected 6"
        )

    style = styles.get(item.font_name) or {}
    font_size = style.get("fontSize") or default_font_size
    if font_size <= 0:
        font_size = default_font_size

    return Token(
        text=item.text,
        x=float(item.transform[4]),
        y=float(item.transform[5]),
        font_size=float(font_size),
    )


def normalize_page(
    content: PageTextContent,
    default_font_size: float = DEFAULT_FONT_SIZE,
) -> list[Token]:
    """Normalize every item of a page, preserving engine order."""
    return [normalize_token(item, content.styles, default_font_size) for item in content.items]
