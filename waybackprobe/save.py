"""
Submission of URLs to the Internet Archive's save-now endpoint.

A submission is a single request; the archive's answer is mapped onto a
SubmitResult or one of SaveForbidden, SaveGone, SaveFailed. Retrying is
left to the caller.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import requests

from .errors import RequestError, SaveFailed, SaveForbidden, SaveGone, URLConstructionError
from .hosts import IA_WEB, is_wayback
from .urls import build_save_url, saved_url_from_location
from .version import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

# Save-now renders the page before answering, so allow longer than a lookup.
DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class SubmitResult:
    """A successful save-now submission."""
    save_url: str
    status_code: int
    status_text: str
    capture_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def get_saved_url(response: requests.Response) -> Optional[str]:
    """
    Return the URL of the capture created by a save-now request.

    The archive names the new capture in ``Content-Location``, e.g.
    ``/web/20170314100523/http://www.bbc.co.uk/news``. When that header is
    missing but redirects were followed onto a capture, the final response
    URL is used instead.

    Raises:
        URLConstructionError: If the header does not form a valid URL.
    """
    location = response.headers.get("Content-Location")
    if location:
        try:
            return saved_url_from_location(location)
        except URLConstructionError as e:
            raise URLConstructionError(f"creation of URL from http response failed: {e}", e.url) from e
    final_url = response.url or ""
    if is_wayback(final_url) and IA_WEB in final_url:
        return final_url
    return None


class SaveSubmitter:
    """
    Client for the save-now endpoint.

    Example:
        with SaveSubmitter() as submitter:
            result = submitter.submit("http://www.bbc.co.uk/news")
            print(result.capture_url)
    """

    def __init__(
        self,
        user_agent: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.timeout = timeout
        self.session = session or requests.Session()

    def submit(self, url: str) -> SubmitResult:
        """
        Ask the archive to capture ``url`` now.

        Raises:
            SaveForbidden: The archive refused the host (403)
            SaveGone: The target is gone (410)
            SaveFailed: Any other non-2xx status
            RequestError: The request could not be completed
        """
        save_url = build_save_url(url)
        logger.debug("GET %s", save_url)
        try:
            response = self.session.get(
                save_url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise RequestError(f"IA save request failed: {e}", save_url) from e

        status = response.status_code
        text = response.reason or ""

        if 200 <= status < 300:
            try:
                capture_url = get_saved_url(response)
            except URLConstructionError as e:
                # The capture was still made; only its location is unreadable.
                logger.warning("Saved %s but could not read the capture location: %s", url, e)
                capture_url = None
            logger.info("Saved %s as %s", url, capture_url)
            return SubmitResult(
                save_url=save_url,
                status_code=status,
                status_text=text,
                capture_url=capture_url,
            )

        logger.warning("Save-now refused %s: %s %s", url, status, text)
        if status == 403:
            raise SaveForbidden(f"save forbidden for {url}: {status} {text}", status, text, save_url)
        if status == 410:
            raise SaveGone(f"save target gone for {url}: {status} {text}", status, text, save_url)
        raise SaveFailed(f"save failed for {url}: {status} {text}", status, text, save_url)

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self) -> "SaveSubmitter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def submit_to_internet_archive(url: str, user_agent: Optional[str] = None, **kwargs) -> SubmitResult:
    """Submit ``url`` to save-now without creating a submitter instance."""
    with SaveSubmitter(user_agent=user_agent, **kwargs) as submitter:
        return submitter.submit(url)
