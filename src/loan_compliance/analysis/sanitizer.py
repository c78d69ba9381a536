"""Isolate the JSON object embedded in a raw analysis-service response."""

from __future__ import annotations

import logging
import re

from loan_compliance.exceptions import MalformedResponseError

log = logging.getLogger(__name__)

# Fences only count at the edges of the response; backticks inside JSON strings are payload
_OPEN_FENCE = re.compile(r"^\s*```[\w+-]*[ \t]*\n?")
_CLOSE_FENCE = re.compile(r"\n?```\s*$")


def strip_code_fences(raw: str) -> str:
    """Drop an opening code fence (optionally tagged, e.g. json) at the start and a closing one at the end."""
    without_open = _OPEN_FENCE.sub("", raw, count=1)
    return _CLOSE_FENCE.sub("", without_open, count=1)


def sanitize_response(raw: str) -> str:
    """Return the ``{ ... }`` span of *raw*, from the first ``{`` to the last ``}``.

    Raises:
        MalformedResponseError: If no brace-delimited span exists.  Raised
            before any parse is attempted.
    """
    text = strip_code_fences(raw).strip()

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        log.debug("No JSON object in response (length=%d)", len(raw))
        raise MalformedResponseError("Response does not contain a JSON object", raw_response=raw)

    return text[start : end + 1]
