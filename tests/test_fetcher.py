# tests/test_fetcher.py
import asyncio

import httpx
import pytest

from core.config import Settings
from core.exceptions import FetchError, RestrictedURLError
from services.scraper.fetcher import fetch_document, is_restricted_url


@pytest.mark.parametrize(
    "url",
    [
        "chrome://settings",
        "about:blank",
        "view-source:https://example.com",
        "https://chrome.google.com/webstore/detail/x",
        "MOZ-EXTENSION://abc/page.html",
    ],
)
def test_restricted_urls(url):
    assert is_restricted_url(url)


def test_regular_urls_are_allowed():
    assert not is_restricted_url("https://example.com/about:us")
    assert not is_restricted_url(None)


def test_fetch_parses_the_page():
    def handler(request):
        assert request.headers["User-Agent"] == "test-agent"
        return httpx.Response(200, text="<html><head><title>Hi</title></head><body><p>x</p></body></html>")

    settings = Settings(USER_AGENT="test-agent")
    doc = asyncio.run(fetch_document("https://example.com/p", settings, transport=httpx.MockTransport(handler)))
    assert doc.title == "Hi"
    assert doc.url == "https://example.com/p"


def test_http_errors_become_fetch_errors():
    transport = httpx.MockTransport(lambda request: httpx.Response(404, text="gone"))
    with pytest.raises(FetchError) as exc_info:
        asyncio.run(fetch_document("https://example.com/missing", Settings(), transport=transport))
    assert exc_info.value.details["upstream_status"] == 404


def test_restricted_url_is_refused_before_any_request():
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(RestrictedURLError):
        asyncio.run(fetch_document("chrome://extensions", Settings(), transport=httpx.MockTransport(handler)))
