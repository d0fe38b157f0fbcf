"""Exception classes for the playlist export pipeline.

Every failure the pipeline can report is one of these. The orchestrator
captures them at its boundary and turns them into an ``ExportResult``, so
callers only see low-level transport exceptions if they talk to a provider
client directly.

Exception Hierarchy:
    ExportError (base)
        AuthDenied - user declined provider authorization (fatal)
        AuthBackendError - credential backend unreachable or malformed (fatal)
        TransientSearchError - one catalog search failed (per-entry)
            RateLimitedError - search answered 429
        AuthError - provider rejected the credential, 401/403 (fatal)
        NoMatches - no entry resolved, nothing to create (fatal)
        CreateError - playlist container could not be created (fatal)
        CommitError - resolved tracks could not be added (fatal, playlist orphaned)
        ExportInProgress - another export is already running on this orchestrator
"""

from __future__ import annotations
from typing import Any, Dict


class ExportError(Exception):
    """Base exception for all export pipeline errors.

    Attributes:
        message: Human-readable error description, safe to show to the user.
        details: Optional dict with additional context for logs
            (e.g. 'status_code', 'entry', 'playlist_id', 'original_error').
    """

    #: Whether the error aborts the whole export.
    fatal: bool = True

    def __init__(self, message: str, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class AuthDenied(ExportError):
    """The user declined (or never granted) access to the destination provider."""


class AuthBackendError(ExportError):
    """The backend issuing service credentials failed or answered garbage."""


class TransientSearchError(ExportError):
    """A single catalog search failed; the entry is skipped and the export continues."""

    fatal = False


class RateLimitedError(TransientSearchError):
    """Catalog search was throttled (HTTP 429).

    ``retry_after`` holds the server's Retry-After hint in seconds, if any.
    """

    def __init__(self, message: str, retry_after: float | None = None, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message, details)
        self.retry_after = retry_after


class AuthError(ExportError):
    """Provider rejected the credential (401/403). Stale or revoked token."""


class NoMatches(ExportError):
    """None of the requested entries could be resolved."""


class CreateError(ExportError):
    """The destination playlist could not be created."""


class CommitError(ExportError):
    """Resolved tracks could not be added to the created playlist.

    The playlist container exists on the provider at this point.
    """


class ExportInProgress(ExportError):
    """Raised when an export is requested while another one is running."""


__all__ = [
    "ExportError",
    "AuthDenied",
    "AuthBackendError",
    "TransientSearchError",
    "RateLimitedError",
    "AuthError",
    "NoMatches",
    "CreateError",
    "CommitError",
    "ExportInProgress",
]
