"""robots.txt loading: a flat list of disallowed path prefixes per origin."""

from __future__ import annotations

import logging
import re

import requests

from .constants import DEFAULT_USER_AGENT, ROBOTS_TXT_PATH


logger = logging.getLogger(__name__)

# Path runs until the first whitespace or inline comment.
DISALLOW_LINE_RE = re.compile(r"^\s*Disallow:\s*(/[^\s#]*)")


def parse_disallowed_paths(text: str) -> list[str]:
    """Pool every `Disallow:` path in the document, ignoring user-agent groups."""

    if not text:
        return []

    paths: list[str] = []
    for line in text.split("\n"):
        match = DISALLOW_LINE_RE.match(line)
        if match:
            paths.append(match.group(1))
    return paths


def fetch_disallowed_paths(
    origin: str,
    *,
    session: requests.Session | None = None,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float | None = None,
) -> list[str]:
    """Fetch `origin/robots.txt` and return its disallowed paths.

    Fails open: any network error or non-2xx status yields an empty list, so a
    missing robots.txt never blocks a crawl.
    """

    if not isinstance(origin, str) or not origin:
        raise ValueError("URL provided to fetch_disallowed_paths is invalid")

    robots_url = f"{origin.rstrip('/')}{ROBOTS_TXT_PATH}"
    client = session if session is not None else requests

    try:
        response = client.get(
            robots_url,
            headers={"User-Agent": user_agent},
            timeout=timeout,
        )
    except requests.RequestException as exc:
        logger.warning(
            "Error fetching robots.txt from %s (%s: %s). Proceeding without restrictions.",
            robots_url,
            exc.__class__.__name__,
            exc,
        )
        return []

    if not 200 <= response.status_code < 300:
        logger.warning(
            "No robots.txt found at %s (HTTP %s). Proceeding without restrictions.",
            robots_url,
            response.status_code,
        )
        return []

    paths = parse_disallowed_paths(response.text or "")
    logger.debug("Loaded %d disallowed paths from %s", len(paths), robots_url)
    return paths


__all__ = [
    "DISALLOW_LINE_RE",
    "fetch_disallowed_paths",
    "parse_disallowed_paths",
]
