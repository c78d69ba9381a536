"""Document assembly: per-page segmentation across a whole document."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from loan_compliance.core.config import SegmentationConfig
from loan_compliance.exceptions import ExtractionError
from loan_compliance.extraction.protocols import ITokenSource
from loan_compliance.extraction.segmenter import SectionSegmenter
from loan_compliance.extraction.tokens import normalize_page
from loan_compliance.models import DocumentAnalysis, DocumentMetadata, Section

log = logging.getLogger(__name__)


class DocumentAssembler:
    """Segment every page of a document and attach its metadata.

    Pages are processed strictly in order; sections never merge across a
    page break.
    """

    def __init__(self, config: SegmentationConfig | None = None) -> None:
        self._config = config or SegmentationConfig()
        self._segmenter = SectionSegmenter(self._config)

    async def assemble(self, source: ITokenSource, filename: str) -> DocumentAnalysis:
        """Build a ``DocumentAnalysis`` from *source*.

        Raises:
            ExtractionError: If any page cannot be read.
        """
        try:
            total_pages = source.page_count
            sections: list[Section] = []
            for page_number in range(1, total_pages + 1):
                content = await source.get_page_content(page_number)
                tokens = normalize_page(content, self._config.default_font_size)
                sections.extend(self._segmenter.segment(tokens, page_number))
        except ExtractionError:
            raise
        except Exception as exc:
            log.error("Failed to extract %s: %s", filename, exc)
            raise ExtractionError(
                "Failed to analyze PDF document. Please ensure it is a valid PDF file."
            ) from exc

        sections = [s for s in sections if s.content.strip()]
        metadata = await self._load_metadata(source, filename)

        log.info(
            "Assembled %s: %d pages, %d sections",
            filename, total_pages, len(sections),
        )
        return DocumentAnalysis(
            document_id=str(uuid.uuid4()),
            filename=filename,
            total_pages=total_pages,
            sections=sections,
            metadata=metadata,
        )

    @staticmethod
    async def _load_metadata(source: ITokenSource, filename: str) -> DocumentMetadata:
        """Best-effort metadata; failures degrade to a filename-only title."""
        info: dict[str, Any]
        try:
            info = await source.get_metadata() or {}
        except Exception as exc:
            log.warning("Metadata unavailable for %s: %s", filename, exc)
            info = {}

        return DocumentMetadata(
            title=info.get("Title") or filename,
            author=info.get("Author") or None,
            creation_date=info.get("CreationDate"),
            modification_date=info.get("ModDate"),
        )
