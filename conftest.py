"""Shared test doubles: an in-memory requests session keyed by URL."""

from __future__ import annotations

import pytest
import requests


DOCTYPE = "<!DOCTYPE html>"


def html_page(*hrefs: str) -> str:
    anchors = "".join(f'<a href="{href}">link</a>' for href in hrefs)
    return f"{DOCTYPE}<html><head><title>t</title></head><body>{anchors}</body></html>"


class FakeResponse:
    def __init__(self, url: str, status_code: int = 200, text: str = "", content_type: str = "text/html"):
        self.url = url
        self.status_code = status_code
        self.text = text
        self.headers = {"Content-Type": content_type}


class FakeSession:
    """Serve canned responses; unknown URLs raise ConnectionError."""

    def __init__(self, routes: dict[str, object] | None = None) -> None:
        self.routes: dict[str, object] = dict(routes or {})
        self.headers: dict[str, str] = {}
        self.calls: list[str] = []
        self.closed = False

    def add(self, url: str, text: str = "", status_code: int = 200) -> None:
        self.routes[url] = FakeResponse(url, status_code=status_code, text=text)

    def get(self, url, headers=None, timeout=None, allow_redirects=True):
        self.calls.append(url)
        route = self.routes.get(url)
        if route is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(route, Exception):
            raise route
        return route

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()
