"""Token source protocol — the contract any text-extraction engine implements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass
class RawTextItem:
    """One positioned text run as produced by an extraction engine.

    ``transform`` is the 6-entry text matrix ``[a, b, c, d, e, f]``;
    the horizontal and vertical positions are ``e`` and ``f``.
    """

    text: str
    transform: list[float]
    font_name: str = ""


@dataclass
class PageTextContent:
    """All text runs of one page plus the page's font style lookup.

    ``styles`` maps a font name to its style attributes, e.g.
    ``{"F1": {"fontSize": 16.0}}``.
    """

    items: list[RawTextItem] = field(default_factory=list)
    styles: dict[str, dict[str, Any]] = field(default_factory=dict)


@runtime_checkable
class ITokenSource(Protocol):
    """Protocol for paginated text-extraction collaborators."""

    @property
    def page_count(self) -> int:
        """Number of pages in the document."""
        ...

    async def get_page_content(self, page_number: int) -> PageTextContent:
        """Return the ordered text runs of the 1-based *page_number*."""
        ...

    async def get_metadata(self) -> dict[str, Any]:
        """Return the document info dictionary.

        Best-effort: implementations may raise, and callers degrade to
        empty metadata.  Recognized keys: ``Title``, ``Author``,
        ``CreationDate``, ``ModDate``.
        """
        ...
