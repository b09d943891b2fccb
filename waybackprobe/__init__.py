"""
waybackprobe - capture discovery and save-now helpers for the Wayback Machine.

Finds the earliest and latest Internet Archive captures of a URL from a
single lookup probe, reads memento Link headers, renders capture dates and
submits URLs to save-now.
"""

import logging

from .dates import format_archive_timestamp, human_date, parse_archive_timestamp
from .errors import (
    InvalidTimestampError,
    RequestError,
    SaveError,
    SaveFailed,
    SaveForbidden,
    SaveGone,
    URLConstructionError,
    WaybackError,
)
from .hosts import is_wayback
from .memento import MementoLinks, MementoRelation, parse_link_header
from .save import SaveSubmitter, SubmitResult, get_saved_url, submit_to_internet_archive
from .urls import (
    build_archive_url,
    build_earliest_lookup_url,
    build_latest_lookup_url,
    build_lookup_url,
    build_save_url,
)
from .version import DEFAULT_USER_AGENT, __version__, version
from .wayback import CaptureRecord, DiscoveryMode, Outcome, WaybackClient, get_wayback_data

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "get_wayback_data",
    "submit_to_internet_archive",
    "WaybackClient",
    "SaveSubmitter",
    "CaptureRecord",
    "SubmitResult",
    "Outcome",
    "DiscoveryMode",
    "MementoLinks",
    "MementoRelation",
    "parse_link_header",
    "get_saved_url",
    "is_wayback",
    "build_lookup_url",
    "build_archive_url",
    "build_earliest_lookup_url",
    "build_latest_lookup_url",
    "build_save_url",
    "format_archive_timestamp",
    "parse_archive_timestamp",
    "human_date",
    "version",
    "DEFAULT_USER_AGENT",
    "WaybackError",
    "URLConstructionError",
    "InvalidTimestampError",
    "RequestError",
    "SaveError",
    "SaveForbidden",
    "SaveGone",
    "SaveFailed",
]
