"""
cdap exception hierarchy.

Every failure raised by a resource controller or the HTTP transport
inherits from :class:`CdapError`, split by where the failure happened:
building the request, talking to the backend, or decoding its answer.
"""

from __future__ import annotations


# ── Base ──────────────────────────────────────────────────────────────
class CdapError(Exception):
    """Root exception for all cdap errors."""


# ── Request assembly ──────────────────────────────────────────────────
class RequestConstructionError(CdapError):
    """The request address or body could not be built."""


# ── Remote calls ──────────────────────────────────────────────────────
class RemoteCallError(CdapError):
    """Transport failure or non-2xx response from the CDAP backend.

    Attributes:
        status_code: HTTP status, or ``None`` when no response was received.
        body: Response body text, when one was received.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


# ── Decoding ──────────────────────────────────────────────────────────
class DecodeError(CdapError):
    """Response body does not have the expected shape."""
