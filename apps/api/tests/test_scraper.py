import httpx
import pytest

from services.errors import FetchFailedError
from services.ports import PageSource
from services.scraper import HttpPageSource, extract_page_text, html_to_text


SAMPLE_PAGE = """
<html>
  <head><title>Acme</title><style>body { color: red; }</style></head>
  <body>
    <script>window.tracking = "secret";</script>
    <noscript>Enable JavaScript</noscript>
    <h1>Acme   Docs</h1>
    <p>Collaborate
       everywhere.</p>
  </body>
</html>
"""


class _StaticPageSource(PageSource):
    def __init__(self, markup: str):
        self.markup = markup
        self.calls = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        return self.markup


def test_html_to_text_drops_non_content_and_collapses_whitespace():
    text = html_to_text(SAMPLE_PAGE)
    assert text == "Acme Docs Collaborate everywhere."
    assert "secret" not in text
    assert "color" not in text
    assert "Enable JavaScript" not in text


def test_html_to_text_uses_body_only():
    assert "Acme Docs" in html_to_text(SAMPLE_PAGE)
    assert not html_to_text(SAMPLE_PAGE).startswith("Acme Acme")


def test_html_to_text_truncates_to_limit():
    markup = "<body><p>" + ("word " * 2000) + "</p></body>"
    assert len(html_to_text(markup)) == 3000
    assert html_to_text(markup, limit=10) == "word word "[:10]


@pytest.mark.asyncio
async def test_extract_page_text_issues_one_fetch():
    source = _StaticPageSource(SAMPLE_PAGE)
    text = await extract_page_text("https://acme.example/docs", page_source=source)
    assert text == "Acme Docs Collaborate everywhere."
    assert source.calls == ["https://acme.example/docs"]


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["", "not a url", "/relative/path", "acme.example"])
async def test_extract_page_text_rejects_invalid_url(url):
    source = _StaticPageSource(SAMPLE_PAGE)
    with pytest.raises(FetchFailedError, match="Invalid URL"):
        await extract_page_text(url, page_source=source)
    assert source.calls == []


@pytest.mark.asyncio
async def test_http_page_source_returns_body_and_sends_user_agent():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["user_agent"] = request.headers.get("user-agent")
        seen["count"] = seen.get("count", 0) + 1
        return httpx.Response(200, text=SAMPLE_PAGE, headers={"content-type": "text/html"})

    source = HttpPageSource(user_agent="TestAgent/1.0", transport=httpx.MockTransport(handler))
    markup = await source.fetch("https://acme.example/")
    assert "Acme" in markup
    assert seen == {"user_agent": "TestAgent/1.0", "count": 1}


@pytest.mark.asyncio
async def test_http_page_source_non_2xx_raises_fetch_failed_without_retry():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url)
        return httpx.Response(503, text="down")

    source = HttpPageSource(transport=httpx.MockTransport(handler))
    with pytest.raises(FetchFailedError, match="HTTP 503"):
        await source.fetch("https://acme.example/")
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_http_page_source_network_error_raises_fetch_failed():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    source = HttpPageSource(transport=httpx.MockTransport(handler))
    with pytest.raises(FetchFailedError, match="connection refused") as exc_info:
        await source.fetch("https://acme.example/")
    assert exc_info.value.kind == "fetch_failed"
