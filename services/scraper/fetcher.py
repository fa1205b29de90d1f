# services/scraper/fetcher.py
"""
Downloads a page and wraps it as a ``Document`` for the extraction core.

Only used when the caller does not supply the HTML itself.  Browser/system
URLs are refused up front; transport errors are retried a few times before
being surfaced as ``FetchError``.
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.config import Settings, get_settings
from core.exceptions import FetchError, RestrictedURLError
from services.extractor.dom import Document

RESTRICTED_PREFIXES = (
    "chrome://",
    "edge://",
    "about:",
    "devtools://",
    "view-source:",
    "chrome-extension://",
    "moz-extension://",
    "opera://",
    "brave://",
    "vivaldi://",
)
WEB_STORE_MARKER = "chrome.google.com/webstore"


def is_restricted_url(url: Optional[str]) -> bool:
    """True for browser‑internal pages whose content cannot be read."""
    if not url:
        return False
    lower = url.lower()
    return lower.startswith(RESTRICTED_PREFIXES) or WEB_STORE_MARKER in lower


def ensure_readable(url: Optional[str]) -> None:
    if is_restricted_url(url):
        raise RestrictedURLError(url)


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    retry=retry_if_exception_type(httpx.TransportError),
    reraise=True,
)
async def _get(url: str, settings: Settings, transport: Optional[httpx.AsyncBaseTransport]) -> httpx.Response:
    headers = {"User-Agent": settings.USER_AGENT}
    async with httpx.AsyncClient(
        timeout=settings.FETCH_TIMEOUT,
        follow_redirects=True,
        headers=headers,
        transport=transport,
    ) as client:
        return await client.get(url)


async def fetch_document(
    url: str,
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Document:
    """GET *url* and parse it; raises ``RestrictedURLError`` or ``FetchError``."""
    ensure_readable(url)
    settings = settings or get_settings()
    try:
        response = await _get(url, settings, transport)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.error(f"Fetching {url} returned {exc.response.status_code}")
        raise FetchError(
            f"Fetching {url} returned HTTP {exc.response.status_code}",
            details={"url": url, "upstream_status": exc.response.status_code},
        ) from exc
    except httpx.HTTPError as exc:
        logger.error(f"Fetching {url} failed: {exc}")
        raise FetchError(f"Unable to read content from {url}: {exc}", details={"url": url}) from exc

    logger.debug(f"Fetched {url} ({len(response.text)} chars)")
    return Document.from_html(response.text, url=str(response.url))
