"""
Exceptions raised by waybackprobe.

"Already archived" and "not in archive" are not errors: they are reported
through ``CaptureRecord.outcome``.
"""

from typing import Optional


class WaybackError(Exception):
    """Base class for all waybackprobe errors."""


class URLConstructionError(WaybackError, ValueError):
    """Raised when a lookup, save or capture URL is not well formed."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class InvalidTimestampError(WaybackError, ValueError):
    """Raised when a string is not a 14-digit archive timestamp."""


class RequestError(WaybackError):
    """Raised when the HTTP request itself could not be completed."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class SaveError(WaybackError):
    """Base class for save-now refusals reported by the archive."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        status_text: Optional[str] = None,
        save_url: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text
        self.save_url = save_url


class SaveForbidden(SaveError):
    """The archive refused to capture the host (403), e.g. robots exclusion."""


class SaveGone(SaveError):
    """The target resource is gone (410)."""


class SaveFailed(SaveError):
    """Any other non-2xx answer from the save-now endpoint."""
