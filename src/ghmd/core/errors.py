from __future__ import annotations

"""Exception taxonomy shared by every ghmd component.

InvalidInput errors are raised before any remote call is made. RemoteError
subclasses classify failures reported by the listing, content and metadata
services; NotFound doubles as the control-flow signal used while probing
candidate branches.
"""

from typing import Optional


class GhmdError(Exception):
    """Base class for all ghmd errors."""


class InvalidInput(GhmdError):
    """User supplied input that cannot be interpreted."""


class InvalidReference(InvalidInput):
    """A GitHub reference without owner or repository."""


class InvalidCleanPath(InvalidInput):
    """A clean-path slug that does not decode."""


class RemoteError(GhmdError):
    def __init__(self, message: str, *, status: Optional[int] = None, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status
        self.url = url


class NotFound(RemoteError):
    """Unknown repository, branch or file."""


class RateLimited(RemoteError):
    """The remote quota is exhausted (HTTP 403/429 on listing backends)."""


class TransientError(RemoteError):
    """Retryable failure (HTTP 429 or 5xx)."""


class FatalError(RemoteError):
    """Non-retryable failure."""


class ServiceError(FatalError):
    """Unexpected status from a listing or metadata backend."""


class NetworkError(FatalError):
    """Socket, DNS or TLS level failure before any HTTP status was received."""


class ContentFetchError(FatalError):
    """Raw file content could not be fetched."""


def describe(exc: BaseException) -> str:
    """Return a short, human-readable description of *exc*."""
    msg = str(exc).strip()
    return msg or exc.__class__.__name__
