"""PyMuPDF-backed token source.

Each text span of ``page.get_text("dict")`` becomes one ``RawTextItem``.
The span's baseline origin is placed in ``transform[4:6]`` (PyMuPDF page
space: y grows downward).  Font styles are keyed by ``"<font>@<size>"`` so
that one family used at several sizes keeps distinct sizes in the lookup.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from loan_compliance.exceptions import ExtractionError
from loan_compliance.extraction.engine import ensure_engine
from loan_compliance.extraction.protocols import PageTextContent, RawTextItem

log = logging.getLogger(__name__)

# PyMuPDF metadata key -> PDF info dictionary key
_METADATA_KEYS = {
    "title": "Title",
    "author": "Author",
    "creationDate": "CreationDate",
    "modDate": "ModDate",
}


def open_pdf(data: bytes) -> PyMuPDFTokenSource:
    """Open an in-memory PDF. Raises ``ExtractionError`` if it is not a readable PDF."""
    fitz = ensure_engine()
    if not data:
        raise ExtractionError("Document is empty")

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as exc:
        raise ExtractionError(
            "Failed to analyze PDF document. Please ensure it is a valid PDF file."
        ) from exc

    warnings = fitz.TOOLS.mupdf_warnings()
    if warnings:
        log.debug("MuPDF warnings while opening document: %s", warnings)

    if doc.needs_pass:
        doc.close()
        raise ExtractionError("Document is password protected")

    return PyMuPDFTokenSource(doc)


def open_pdf_path(path: str | Path) -> PyMuPDFTokenSource:
    """Read *path* and open it with :func:`open_pdf`."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise ExtractionError(f"Cannot read document {path}") from exc
    return open_pdf(data)


class PyMuPDFTokenSource:
    """``ITokenSource`` over an open PyMuPDF document."""

    def __init__(self, doc: Any) -> None:
        self._doc = doc

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    async def get_page_content(self, page_number: int) -> PageTextContent:
        if not 1 <= page_number <= self.page_count:
            raise ExtractionError(
                f"Page {page_number} out of range (document has {self.page_count} pages)"
            )
        return await asyncio.to_thread(self._extract_page, page_number)

    async def get_metadata(self) -> dict[str, Any]:
        meta = self._doc.metadata or {}
        return {
            info_key: meta[key]
            for key, info_key in _METADATA_KEYS.items()
            if meta.get(key)
        }

    def close(self) -> None:
        self._doc.close()

    def __enter__(self) -> PyMuPDFTokenSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _extract_page(self, page_number: int) -> PageTextContent:
        page = self._doc[page_number - 1]
        page_dict = page.get_text("dict")

        content = PageTextContent()
        for block in page_dict.get("blocks", []):
            if block.get("type") != 0:
                continue
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    text = span.get("text", "")
                    if not text:
                        continue
                    size = float(span.get("size", 0.0))
                    font = span.get("font", "")
                    font_key = f"{font}@{size:.2f}"
                    content.styles.setdefault(font_key, {"fontFamily": font, "fontSize": size})
                    x, y = span.get("origin", (0.0, 0.0))
                    content.items.append(
                        RawTextItem(
                            text=text,
                            transform=[1.0, 0.0, 0.0, 1.0, float(x), float(y)],
                            font_name=font_key,
                        )
                    )
        return content
