"""Map any analysis failure onto exactly one user-facing error kind.

Classification order (first match wins):

1. transport failure (connection error, timeout, 5xx / 408 status) → ``NetworkError``
2. rate limiting (429, quota exhaustion) → ``RateLimitError``
3. credentials (401 / 403, bad API key) → ``AuthError``
4. sanitize / parse / shape failure → ``ResponseFormatError``
5. anything else → ``UnknownAnalysisError``

LiteLLM exceptions are matched by type first.  Anything else, such as errors
raised by a dotted-path backend, is classified by the ``status_code`` that
OpenAI and httpx-style exceptions carry, then by message hints.
"""

from __future__ import annotations

import asyncio
import re
import sys

from loan_compliance.exceptions import (
    AnalysisError,
    AuthError,
    NetworkError,
    RateLimitError,
    ResponseFormatError,
    ResponsePayloadError,
    UnknownAnalysisError,
)

_RATE_LIMIT_HINTS = re.compile(r"rate.?limit|quota|resource.?exhausted|too many requests", re.IGNORECASE)
_AUTH_HINTS = re.compile(
    r"api.?key|unauthori[sz]ed|unauthenticated|permission.?denied|invalid credentials", re.IGNORECASE
)


def _status_code(exc: BaseException) -> int | None:
    status = getattr(exc, "status_code", None)
    if status is None:
        response = getattr(exc, "response", None)
        status = getattr(response, "status_code", None)
    try:
        return int(status) if status is not None else None
    except (TypeError, ValueError):
        return None


def is_transport_failure(exc: BaseException) -> bool:
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError, ConnectionError)):
        return True
    status = _status_code(exc)
    return status is not None and (status >= 500 or status == 408)


def is_rate_limited(exc: BaseException) -> bool:
    status = _status_code(exc)
    if status is not None:
        return status == 429
    if isinstance(exc, ResponsePayloadError):
        return False
    return bool(_RATE_LIMIT_HINTS.search(str(exc)))


def is_auth_failure(exc: BaseException) -> bool:
    status = _status_code(exc)
    if status is not None:
        return status in (401, 403)
    if isinstance(exc, ResponsePayloadError):
        return False
    return bool(_AUTH_HINTS.search(str(exc)))


def _litellm_kind(exc: BaseException) -> type[AnalysisError] | None:
    """Map a LiteLLM exception type onto an error kind, or None if it is not one."""
    # a LiteLLM exception can only exist once litellm has been imported
    if "litellm" not in sys.modules:
        return None
    from litellm import exceptions as llm

    if isinstance(
        exc,
        (llm.Timeout, llm.APIConnectionError, llm.ServiceUnavailableError, llm.InternalServerError),
    ):
        return NetworkError
    if isinstance(exc, llm.RateLimitError):
        return RateLimitError
    if isinstance(exc, (llm.AuthenticationError, llm.PermissionDeniedError)):
        return AuthError
    return None


def classify_failure(exc: BaseException) -> AnalysisError:
    """Return the classified error for *exc* (not raised, not chained).

    An already-classified ``AnalysisError`` is returned unchanged.
    """
    if isinstance(exc, AnalysisError):
        return exc
    kind = _litellm_kind(exc)
    if kind is not None:
        return kind()
    if is_transport_failure(exc):
        return NetworkError()
    if is_rate_limited(exc):
        return RateLimitError()
    if is_auth_failure(exc):
        return AuthError()
    if isinstance(exc, ResponsePayloadError):
        return ResponseFormatError()
    return UnknownAnalysisError()
