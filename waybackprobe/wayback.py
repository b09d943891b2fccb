"""
Wayback Machine capture discovery.

Probes the lookup endpoint with a HEAD request and reports whether a URL
is already an archive link, has no captures, or where its earliest and
latest captures live.

Example usage:
    from waybackprobe import get_wayback_data

    record = get_wayback_data("http://www.bbc.co.uk/news")
    if record.outcome is Outcome.FRESH:
        print(record.earliest_capture_url, record.latest_capture_url)
"""

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import requests

from .errors import RequestError
from .hosts import is_wayback
from .memento import parse_link_header
from .urls import build_earliest_lookup_url, build_latest_lookup_url, build_save_url
from .version import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
DEFAULT_ACCEPT = "*/*"

ALREADY_ARCHIVED_REASON = "already an internet archive record"


class Outcome(Enum):
    """What a lookup found."""
    FRESH = "fresh"                          # Captures located
    ALREADY_ARCHIVED = "already_archived"    # Input is itself a Wayback URL
    NOT_IN_ARCHIVE = "not_in_archive"        # Zero captures


class DiscoveryMode(Enum):
    """How capture locations are read from the lookup response."""
    LINK = "link"          # One probe, memento Link header
    LOCATION = "location"  # Two probes, redirect Location headers
    AUTO = "auto"          # Link relations first, Location for whatever they leave out


@dataclass(frozen=True)
class CaptureRecord:
    """Result of resolving one target URL."""
    url: str
    outcome: Outcome
    save_url: str
    earliest_capture_url: Optional[str] = None
    latest_capture_url: Optional[str] = None
    response_code: Optional[int] = None
    response_text: Optional[str] = None
    reason: Optional[str] = None

    @property
    def already_archived(self) -> bool:
        return self.outcome is Outcome.ALREADY_ARCHIVED

    @property
    def not_in_archive(self) -> bool:
        return self.outcome is Outcome.NOT_IN_ARCHIVE

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["outcome"] = self.outcome.value
        return result


class WaybackClient:
    """
    Client for locating captures in the Wayback Machine.

    Example:
        with WaybackClient(user_agent="my-tool/1.0") as client:
            record = client.resolve("http://www.bbc.co.uk/news")
    """

    def __init__(
        self,
        user_agent: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        discovery: DiscoveryMode = DiscoveryMode.AUTO,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            user_agent: User-Agent header; defaults to the library identifier
            timeout: Request timeout in seconds
            discovery: Which response header carries capture locations
            session: Optional requests Session for connection pooling
        """
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.timeout = timeout
        self.discovery = DiscoveryMode(discovery)
        self.session = session or requests.Session()

    @property
    def headers(self) -> Dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": DEFAULT_ACCEPT}

    def resolve(self, url: str) -> CaptureRecord:
        """
        Find the earliest and latest captures of ``url``.

        "Already archived" and "not in archive" are reported through
        ``CaptureRecord.outcome``, never raised.

        Raises:
            URLConstructionError: If a lookup URL cannot be built
            RequestError: If a probe cannot be completed
        """
        save_url = build_save_url(url)

        if is_wayback(url):
            logger.debug("Skipping lookup, %s is already a Wayback URL", url)
            return CaptureRecord(
                url=url,
                outcome=Outcome.ALREADY_ARCHIVED,
                save_url=save_url,
                reason=ALREADY_ARCHIVED_REASON,
            )

        earliest_lookup = build_earliest_lookup_url(url)
        response = self._probe(earliest_lookup)
        earliest, latest = self._captures_from(url, response)

        if response.status_code == 404 and earliest is None and latest is None:
            logger.info("No captures of %s in the Internet Archive", url)
            return self._not_in_archive(url, save_url, response)

        if latest is None and self.discovery is not DiscoveryMode.LINK:
            # The first probe only bracketed the oldest end.
            latest = self._latest_location(url)

        if earliest is None and latest is None:
            logger.info("Lookup of %s named no captures", url)
            return self._not_in_archive(url, save_url, response)

        logger.info("Captures of %s: earliest=%s latest=%s", url, earliest, latest)
        return CaptureRecord(
            url=url,
            outcome=Outcome.FRESH,
            save_url=save_url,
            earliest_capture_url=earliest,
            latest_capture_url=latest,
            response_code=response.status_code,
            response_text=response.reason,
        )

    def _not_in_archive(self, url: str, save_url: str, response: requests.Response) -> CaptureRecord:
        return CaptureRecord(
            url=url,
            outcome=Outcome.NOT_IN_ARCHIVE,
            save_url=save_url,
            response_code=response.status_code,
            response_text=response.reason,
        )

    def _captures_from(self, url: str, response: requests.Response) -> Tuple[Optional[str], Optional[str]]:
        """Earliest and latest capture URLs named by the first probe."""
        earliest = latest = None
        if self.discovery is not DiscoveryMode.LOCATION:
            links = parse_link_header(response.headers.get("Link"))
            if len(links):
                logger.debug("Link relations for %s: %s", url, links.to_dict())
            earliest, latest = links.earliest, links.latest
        if self.discovery is not DiscoveryMode.LINK:
            earliest = earliest or response.headers.get("Location") or None
        return earliest, latest

    def _latest_location(self, url: str) -> Optional[str]:
        response = self._probe(build_latest_lookup_url(url))
        return response.headers.get("Location") or None

    def _probe(self, lookup_url: str) -> requests.Response:
        """HEAD ``lookup_url`` without following the archive's redirect."""
        logger.debug("HEAD %s", lookup_url)
        try:
            response = self.session.head(
                lookup_url,
                headers=self.headers,
                timeout=self.timeout,
                allow_redirects=False,
            )
        except requests.exceptions.RequestException as e:
            raise RequestError(f"IA http request failed: {e}", lookup_url) from e
        logger.debug("HEAD %s -> %s %s", lookup_url, response.status_code, response.reason)
        return response

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self) -> "WaybackClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def get_wayback_data(url: str, user_agent: Optional[str] = None, **kwargs) -> CaptureRecord:
    """
    Resolve ``url`` without creating a client instance.

    Args:
        url: Target URL
        user_agent: User-Agent header; defaults to the library identifier
        **kwargs: Additional WaybackClient arguments (timeout, discovery)

    Returns:
        CaptureRecord describing the captures found
    """
    with WaybackClient(user_agent=user_agent, **kwargs) as client:
        return client.resolve(url)
