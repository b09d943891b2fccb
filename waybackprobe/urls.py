"""
Builders for Wayback Machine lookup and save-now URLs.

The lookup endpoint redirects a request for any timestamp to the nearest
capture it holds, so asking for a date before the archive existed lands on
the earliest capture and asking for "now" lands on the latest one.
"""

import re
from datetime import datetime, timezone
from typing import Optional, Union
from urllib.parse import urlsplit

from .dates import format_archive_timestamp
from .errors import URLConstructionError
from .hosts import IA_ROOT, IA_SAVE, IA_WEB, is_wayback

# Predates the archive, so the lookup always resolves to the oldest capture.
EARLIEST_DATE = datetime(1900, 8, 31, 23, 13, 0)

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")

__all__ = [
    "EARLIEST_DATE",
    "is_wayback",
    "build_lookup_url",
    "build_archive_url",
    "build_earliest_lookup_url",
    "build_latest_lookup_url",
    "build_save_url",
    "saved_url_from_location",
]


def _check_url(url: str) -> str:
    """Raise URLConstructionError unless ``url`` is a well formed absolute URL."""
    if _CONTROL_RE.search(url):
        raise URLConstructionError(f"internet archive url creation failed: control character in {url!r}", url)
    if _BAD_ESCAPE_RE.search(url):
        raise URLConstructionError(f"internet archive url creation failed: invalid percent-escape in {url!r}", url)
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise URLConstructionError(f"internet archive url creation failed: {e}", url) from e
    if not parts.scheme or not parts.netloc:
        raise URLConstructionError(f"internet archive url creation failed: {url!r} is not absolute", url)
    return url


def build_lookup_url(target_url: str, timestamp: str) -> str:
    """
    Build ``http://web.archive.org/web/<timestamp>/<target_url>``.

    Raises:
        URLConstructionError: If the result is not a well formed URL.
    """
    return _check_url(f"{IA_ROOT}{IA_WEB}{timestamp}/{target_url}")


def build_archive_url(timestamp: Union[datetime, str], target_url: str) -> str:
    """
    Build the Wayback URL of a capture at ``timestamp``.

    Args:
        timestamp: A datetime or a 14-digit string like "20170413225815"
        target_url: Target URL, e.g. "http://www.nationalarchives.gov.uk/"
    """
    if isinstance(timestamp, datetime):
        timestamp = format_archive_timestamp(timestamp)
    return build_lookup_url(target_url, timestamp)


def build_earliest_lookup_url(target_url: str) -> str:
    """Lookup URL asking for the oldest possible capture of ``target_url``."""
    return build_lookup_url(target_url, format_archive_timestamp(EARLIEST_DATE))


def build_latest_lookup_url(target_url: str, now: Optional[datetime] = None) -> str:
    """Lookup URL asking for the newest capture; ``now`` defaults to the current UTC time."""
    if now is None:
        now = datetime.now(timezone.utc)
    return build_lookup_url(target_url, format_archive_timestamp(now))


def build_save_url(target_url: str) -> str:
    """Save-now submission URL. The target is appended as-is."""
    return f"{IA_ROOT}{IA_SAVE}{target_url}"


def saved_url_from_location(content_location: str) -> str:
    """
    Turn a save-now ``Content-Location`` slug into a full capture URL.

    Example:
        >>> saved_url_from_location("/web/20170314100523/http://www.bbc.co.uk/news")
        'http://web.archive.org/web/20170314100523/http://www.bbc.co.uk/news'
    """
    location = content_location.strip()
    if not is_wayback(location):
        location = IA_ROOT + location
    return _check_url(location)
