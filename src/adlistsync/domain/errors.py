"""Error taxonomy for a sync run."""

from __future__ import annotations


class AdlistSyncError(RuntimeError):
    """Base class for failures that abort a sync run."""


class FetchError(AdlistSyncError):
    """Raised when the remote feed cannot be retrieved (transport or non-2xx)."""


class ParseError(AdlistSyncError):
    """Raised when the feed body is not a well-formed five column CSV."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


class StoreError(AdlistSyncError):
    """Raised when a statement or transaction against the gravity store fails."""
