"""Competitor page retrieval and plain-text extraction."""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

from config import settings
from services.errors import FetchFailedError
from services.ports import PageSource

logger = logging.getLogger(__name__)

WHITESPACE_PATTERN = re.compile(r"\s+")
NON_CONTENT_TAGS = ("script", "style", "noscript")


def _validate_url(url: str) -> str:
    candidate = str(url or "").strip()
    parsed = urlparse(candidate)
    if not parsed.scheme or not parsed.netloc:
        raise FetchFailedError(f"Invalid URL format: {url}")
    return candidate


class HttpPageSource(PageSource):
    """Fetches page markup with a single httpx request, no retries."""

    def __init__(
        self,
        *,
        user_agent: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.user_agent = user_agent or settings.SCRAPER_USER_AGENT
        self.timeout_seconds = float(timeout_seconds or settings.SCRAPER_TIMEOUT_SECONDS)
        self.transport = transport

    async def fetch(self, url: str) -> str:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        }
        try:
            async with httpx.AsyncClient(
                headers=headers,
                timeout=self.timeout_seconds,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise FetchFailedError(f"HTTP {status}: {exc.response.reason_phrase}") from exc
        except httpx.HTTPError as exc:
            raise FetchFailedError(str(exc) or exc.__class__.__name__) from exc


def html_to_text(markup: str, limit: Optional[int] = None) -> str:
    """Strip non-content elements, collapse whitespace and truncate to ``limit`` chars."""
    soup = BeautifulSoup(markup or "", "html.parser")
    for element in soup(list(NON_CONTENT_TAGS)):
        element.decompose()
    root = soup.body or soup
    text = WHITESPACE_PATTERN.sub(" ", root.get_text(" ")).strip()
    max_chars = settings.SCRAPE_TEXT_LIMIT if limit is None else max(int(limit), 0)
    return text[:max_chars]


async def extract_page_text(
    url: str,
    *,
    page_source: Optional[PageSource] = None,
    limit: Optional[int] = None,
) -> str:
    """Fetch ``url`` once and return its visible body text, bounded to ``limit`` characters."""
    target = _validate_url(url)
    source = page_source or HttpPageSource()
    markup = await source.fetch(target)
    text = html_to_text(markup, limit)
    logger.debug("Extracted %d characters from %s", len(text), target)
    return text
