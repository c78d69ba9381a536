"""Analysis backend protocol — the contract for the external analysis service."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IAnalysisBackend(Protocol):
    """Protocol for pluggable analysis backends.

    The transport enforces no schema: the returned text is untrusted and is
    sanitized and validated by the caller.
    """

    async def complete(self, prompt: str) -> str:
        """Send *prompt* and return the raw response text.

        Implementations must not retry; retry policy belongs to the caller.
        Transport, rate-limit and credential failures propagate as raised.
        """
        ...
