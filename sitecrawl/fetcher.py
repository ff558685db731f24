"""Single-request HTML fetching over a shared requests session."""

from __future__ import annotations

import logging
import time

import requests

from .config import CrawlConfig
from .constants import HTML_DOCTYPE_MARKER
from .types import FetchResult


logger = logging.getLogger(__name__)


def looks_like_html(text: str | None) -> bool:
    """Minimal HTML sniff: the body must carry a doctype marker."""

    if not text:
        return False
    return HTML_DOCTYPE_MARKER in text.lower()


class Fetcher:
    """Fetch pages with `requests`.

    One GET per call, no retries. Rate limiting is the scheduler's job; this
    class only issues the request and classifies the response.
    """

    def __init__(self, config: CrawlConfig, *, session: requests.Session | None = None) -> None:
        self.config = config

        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.session.headers["User-Agent"] = config.user_agent

    def fetch(self, url: str) -> FetchResult:
        """GET `url` and return the raw outcome; network errors are captured, not raised."""

        if not isinstance(url, str) or not url:
            raise ValueError("URL provided to fetch is invalid")

        started = time.perf_counter()
        try:
            response = self.session.get(
                url,
                timeout=self.config.timeout_seconds,
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            return FetchResult(
                requested_url=url,
                final_url=None,
                status_code=None,
                content_type=None,
                text=None,
                elapsed_ms=int((time.perf_counter() - started) * 1000),
                error=f"{exc.__class__.__name__}: {exc}",
            )

        return FetchResult(
            requested_url=url,
            final_url=response.url or url,
            status_code=response.status_code,
            content_type=response.headers.get("Content-Type"),
            text=response.text,
            elapsed_ms=int((time.perf_counter() - started) * 1000),
            error=None,
        )

    def fetch_html(self, url: str) -> str | None:
        """Return the HTML body of `url`, or None when it is unavailable or not HTML."""

        return self.html_body(self.fetch(url))

    @staticmethod
    def html_body(result: FetchResult) -> str | None:
        """Extract an HTML body from a fetch result, logging why when there is none."""

        if result.error is not None:
            logger.error("Error fetching HTML from %s: %s", result.requested_url, result.error)
            return None

        if not result.ok:
            logger.warning(
                "HTTP %s when fetching HTML from %s. Proceeding to next URL.",
                result.status_code,
                result.requested_url,
            )
            return None

        if not looks_like_html(result.text):
            logger.warning(
                "Response from %s is not an HTML document (content-type %s).",
                result.requested_url,
                result.content_type,
            )
            return None

        return result.text

    def close(self) -> None:
        """Close the session when this fetcher created it."""

        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["Fetcher", "looks_like_html"]
