"""Process-wide, lazily initialized PDF engine.

PyMuPDF is imported and configured exactly once, on first use, behind a
lock.  Callers go through :func:`ensure_engine` instead of importing
``fitz`` at module import time.
"""

from __future__ import annotations

import logging
import threading
from types import ModuleType

from loan_compliance.exceptions import ExtractionError

log = logging.getLogger(__name__)

_engine: ModuleType | None = None
_engine_lock = threading.Lock()


def ensure_engine() -> ModuleType:
    """Return the initialized ``fitz`` module, initializing it on first call.

    Raises:
        ExtractionError: If PyMuPDF is not available in this environment.
    """
    global _engine
    if _engine is not None:
        return _engine

    with _engine_lock:
        if _engine is None:
            try:
                import fitz  # PyMuPDF
            except ImportError as exc:
                raise ExtractionError(
                    "PDF extraction is not available in this environment (PyMuPDF is not installed)"
                ) from exc

            # MuPDF echoes recoverable parse errors to stderr; collected via mupdf_warnings()
            fitz.TOOLS.mupdf_display_errors(False)
            log.info("PDF engine initialized: PyMuPDF %s", fitz.VersionBind)
            _engine = fitz

    return _engine


def is_engine_ready() -> bool:
    return _engine is not None
