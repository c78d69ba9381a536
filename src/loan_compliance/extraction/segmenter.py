"""Section segmentation: group one page's tokens into typed ``Section`` records.

A new section starts when the vertical gap to the previous token exceeds
``line_gap`` or the font grows by more than ``font_ratio``.  Both thresholds
are fixed policy values rather than document-derived metrics, so pages with
unusual geometry or typefaces can mis-segment.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from loan_compliance.core.config import SegmentationConfig
from loan_compliance.models import BoundingBox, Section, SectionType, Token

log = logging.getLogger(__name__)

# the last entry is a UTF-8 bullet mis-decoded as cp1252, which some producers emit
BULLET_GLYPHS: tuple[str, ...] = ("•", "◦", "▪", "‣", "●", "○", "■", "â€¢")

_NUMBERED_ITEM = re.compile(r"^\d+\.")


@dataclass
class _SectionBuilder:
    """Mutable in-progress section; frozen into a ``Section`` on close."""

    page_number: int
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    content: str = ""

    def absorb(self, token: Token, width_factor: float) -> None:
        if self.content:
            self.content += " "
        self.content += token.text.strip()
        self.width = max(
            self.width,
            token.x + len(token.text) * token.font_size * width_factor - self.x,
        )
        self.height = max(self.height, token.y - self.y)

    def build(self, section_type: SectionType) -> Section:
        return Section(
            type=section_type,
            content=self.content,
            page_number=self.page_number,
            bounding_box=BoundingBox(x=self.x, y=self.y, width=self.width, height=self.height),
        )


def classify_section(
    content: str,
    font_size: float,
    *,
    heading_max_chars: int = 50,
    heading_min_font_size: float = 14.0,
) -> SectionType:
    """Classify finished section text.

    ``font_size`` is the size of the token that closed the section, or the
    last token seen when the page ended.  Never returns ``TABLE``.
    """
    if len(content) < heading_max_chars and font_size > heading_min_font_size:
        return SectionType.HEADING
    stripped = content.strip()
    if stripped.startswith(BULLET_GLYPHS) or _NUMBERED_ITEM.match(stripped):
        return SectionType.LIST
    return SectionType.PARAGRAPH


class SectionSegmenter:
    """Single-page segmentation pass.

    Holds only configuration; the carried ``last_y`` / ``last_font_size``
    state lives in :meth:`segment` so one instance can serve many pages.
    """

    def __init__(self, config: SegmentationConfig | None = None) -> None:
        self._config = config or SegmentationConfig()

    def is_boundary(
        self,
        last_y: Optional[float],
        last_font_size: Optional[float],
        token: Token,
    ) -> bool:
        if last_y is None or last_font_size is None:
            return False
        return (
            abs(token.y - last_y) > self._config.line_gap
            or token.font_size > last_font_size * self._config.font_ratio
        )

    def classify(self, content: str, font_size: float) -> SectionType:
        return classify_section(
            content,
            font_size,
            heading_max_chars=self._config.heading_max_chars,
            heading_min_font_size=self._config.heading_min_font_size,
        )

    def segment(self, tokens: list[Token], page_number: int) -> list[Section]:
        """Group *tokens* (engine order) into sections for *page_number*."""
        sections: list[Section] = []
        current: Optional[_SectionBuilder] = None
        last_y: Optional[float] = None
        last_font_size: Optional[float] = None

        for token in tokens:
            if current is None:
                # First section is anchored at the first token
                current = _SectionBuilder(page_number=page_number, x=token.x, y=token.y)
            elif self.is_boundary(last_y, last_font_size, token):
                if current.content:
                    sections.append(current.build(self.classify(current.content, token.font_size)))
                current = _SectionBuilder(page_number=page_number, x=token.x, y=token.y)

            current.absorb(token, self._config.width_factor)
            last_y = token.y
            last_font_size = token.font_size

        if current is not None and current.content and last_font_size is not None:
            sections.append(current.build(self.classify(current.content, last_font_size)))

        log.debug(
            "Segmented page %d: %d tokens -> %d sections",
            page_number, len(tokens), len(sections),
        )
        return sections
