"""Exception hierarchy for loan-compliance-checker."""

from __future__ import annotations


class ComplianceError(Exception):
    """Base exception for all loan-compliance-checker errors."""


class ExtractionError(ComplianceError):
    """Raised when the source document cannot be read or segmented."""


# ── Response payload failures (sanitize / parse / shape) ─────────────


class ResponsePayloadError(ComplianceError):
    """The analysis service returned text that is not a usable report payload."""

    def __init__(self, message: str, raw_response: str = "") -> None:
        super().__init__(message)
        self.raw_response = raw_response


class MalformedResponseError(ResponsePayloadError):
    """No ``{ ... }`` span could be isolated from the raw response."""


class ParseError(ResponsePayloadError):
    """The isolated payload is not syntactically valid JSON."""


class ShapeError(ResponsePayloadError):
    """The payload parsed but does not match the report schema."""


# ── Classified, user-facing analysis failures ────────────────────────


class AnalysisError(ComplianceError):
    """A classified analysis failure with a stable, user-presentable message.

    The underlying exception is chained via ``__cause__`` for diagnostics and
    is never part of :attr:`user_message`.
    """

    user_message = "Failed to analyze document. Please try again."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)


class NetworkError(AnalysisError):
    """Transport failure talking to the analysis service."""

    user_message = "Could not reach the analysis service. Check your connection and try again."


class RateLimitError(AnalysisError):
    """The analysis service rejected the request due to rate limiting."""

    user_message = "The analysis service is receiving too many requests. Please wait and try again."


class AuthError(AnalysisError):
    """The analysis service rejected the configured credentials."""

    user_message = "The analysis service rejected the configured credentials. Check your API key."


class ResponseFormatError(AnalysisError):
    """The analysis service answered, but the answer could not be used."""

    user_message = "The analysis service returned a response in an unexpected format. Please try again."


class UnknownAnalysisError(AnalysisError):
    """Any analysis failure not covered by a more specific kind."""

    user_message = "Failed to analyze document with AI. Please try again."
