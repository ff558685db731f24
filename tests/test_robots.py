import logging

import pytest
import requests

from sitecrawl.robots import fetch_disallowed_paths, parse_disallowed_paths

from conftest import FakeResponse, FakeSession


ROBOTS_URL = "https://example.test/robots.txt"


def test_parse_pools_all_user_agent_groups():
    text = "\n".join(
        [
            "User-agent: *",
            "Disallow: /private/",
            "  Disallow:/tmp # scratch space",
            "Allow: /public/",
            "",
            "User-agent: badbot",
            "Disallow: /",
            "Disallow:",
            "Disallow: relative",
            "disallow: /lowercase",
            "Disallow: /search?q=*#frag",
        ]
    )

    assert parse_disallowed_paths(text) == ["/private/", "/tmp", "/", "/search?q=*"]


def test_parse_empty_document():
    assert parse_disallowed_paths("") == []


def test_fetch_returns_disallowed_paths(fake_session):
    fake_session.add(ROBOTS_URL, "Disallow: /private/\n")

    assert fetch_disallowed_paths("https://example.test", session=fake_session) == ["/private/"]
    assert fake_session.calls == [ROBOTS_URL]


def test_fetch_fails_open_on_missing_robots(caplog):
    session = FakeSession({ROBOTS_URL: FakeResponse(ROBOTS_URL, status_code=404, text="nope")})

    with caplog.at_level(logging.WARNING, logger="sitecrawl.robots"):
        paths = fetch_disallowed_paths("https://example.test", session=session)

    assert paths == []
    assert "Proceeding without restrictions" in caplog.text
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]


def test_fetch_fails_open_on_network_error():
    session = FakeSession({ROBOTS_URL: requests.Timeout("slow")})
    assert fetch_disallowed_paths("https://example.test", session=session) == []


def test_fetch_uses_requests_module_without_session(monkeypatch):
    seen = {}

    def fake_get(url, headers=None, timeout=None):
        seen["url"] = url
        seen["ua"] = headers["User-Agent"]
        return FakeResponse(url, text="Disallow: /admin")

    monkeypatch.setattr(requests, "get", fake_get)

    assert fetch_disallowed_paths("https://example.test/", user_agent="bot/1") == ["/admin"]
    assert seen == {"url": ROBOTS_URL, "ua": "bot/1"}


def test_fetch_rejects_invalid_origin():
    with pytest.raises(ValueError):
        fetch_disallowed_paths("")
