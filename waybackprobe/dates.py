"""
Conversion between Wayback Machine timestamps and readable dates.

Archive timestamps are fixed 14-digit ``YYYYMMDDhhmmss`` strings, e.g.
``20161104020243``.
"""

import re
from datetime import datetime

from .errors import InvalidTimestampError
from .hosts import WEB_PREFIXES

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
HUMAN_DATE_FORMAT = "%d %B %Y"

_TIMESTAMP_RE = re.compile(r"\d{14}")


def format_archive_timestamp(when: datetime) -> str:
    """Encode ``when`` as a 14-digit archive timestamp."""
    return when.strftime(TIMESTAMP_FORMAT)


def parse_archive_timestamp(value: str) -> datetime:
    """
    Decode a 14-digit archive timestamp.

    Raises:
        InvalidTimestampError: If ``value`` is not exactly 14 digits or
            does not name a real date and time.
    """
    if not isinstance(value, str) or not _TIMESTAMP_RE.fullmatch(value):
        raise InvalidTimestampError(f"Invalid archive timestamp: {value!r}")
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise InvalidTimestampError(f"Invalid archive timestamp: {value!r}") from e


def _timestamp_slug(link: str) -> str:
    slug = ""
    for prefix in WEB_PREFIXES:
        if prefix in link:
            parts = link.split(prefix)
            if len(parts) == 2:
                slug = parts[1].split("/")[0]
    return slug


def human_date(link: str) -> str:
    """
    Return the capture date of a Wayback URL as e.g. ``13 April 2017``.

    Best effort: an empty string is returned for links without a
    recognised ``/web/`` prefix or whose timestamp segment does not parse.

    Example:
        >>> human_date("http://web.archive.org/web/19961221203254/http://www0.bbc.co.uk:80/")
        '21 December 1996'
    """
    slug = _timestamp_slug(link)
    if not slug:
        return ""
    try:
        when = parse_archive_timestamp(slug)
    except InvalidTimestampError:
        return ""
    return when.strftime(HUMAN_DATE_FORMAT)
