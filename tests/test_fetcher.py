import pytest

from sitecrawl.config import CrawlConfig
from sitecrawl.fetcher import Fetcher, looks_like_html

from conftest import FakeSession, html_page


URL = "https://example.test/page"


@pytest.fixture
def config():
    return CrawlConfig(seed="https://example.test/", user_agent="test-agent/1.0")


def test_looks_like_html():
    assert looks_like_html("<!DOCTYPE html><html></html>")
    assert looks_like_html("\n<!doctype HTML>\n<html></html>")
    assert not looks_like_html("<html><body>no doctype</body></html>")
    assert not looks_like_html('{"json": true}')
    assert not looks_like_html(None)


def test_fetcher_sets_user_agent(config, fake_session):
    Fetcher(config, session=fake_session)
    assert fake_session.headers["User-Agent"] == "test-agent/1.0"


def test_fetch_html_returns_body(config, fake_session):
    body = html_page("/a")
    fake_session.add(URL, body)

    assert Fetcher(config, session=fake_session).fetch_html(URL) == body


def test_fetch_html_absent_on_error_status(config, fake_session):
    fake_session.add(URL, html_page("/a"), status_code=500)

    fetcher = Fetcher(config, session=fake_session)
    result = fetcher.fetch(URL)

    assert result.ok is False
    assert result.status_code == 500
    assert fetcher.fetch_html(URL) is None


def test_fetch_html_absent_on_non_html_body(config, fake_session):
    fake_session.add(URL, "plain text body")
    assert Fetcher(config, session=fake_session).fetch_html(URL) is None


def test_fetch_captures_network_errors(config, fake_session):
    fetcher = Fetcher(config, session=fake_session)

    result = fetcher.fetch(URL)

    assert result.ok is False
    assert result.error.startswith("ConnectionError:")
    assert fetcher.fetch_html(URL) is None


def test_fetch_rejects_invalid_url(config, fake_session):
    with pytest.raises(ValueError):
        Fetcher(config, session=fake_session).fetch("")


def test_close_leaves_injected_session_open(config, fake_session):
    with Fetcher(config, session=fake_session):
        pass
    assert fake_session.closed is False
