import pytest
from sqlalchemy import select

from models.idea import Idea
from services.errors import FetchFailedError
from services.ports import CompletionClient, PageSource
from services.scheduler import run_scheduled_scan


class _PerUrlPageSource(PageSource):
    def __init__(self, failing: set):
        self.failing = failing
        self.calls = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url in self.failing:
            raise FetchFailedError(f"HTTP 500 for {url}")
        return f"<body><h1>{url}</h1></body>"


class _NamedCompletion(CompletionClient):
    async def complete(self, messages):
        url = messages[1]["content"].split("\n", 1)[0].removeprefix("URL: ")
        name = url.rstrip("/").rsplit("/", 1)[-1]
        return f'{{"competitor_name": "{name}", "weaknesses": ["weak point"]}}'


@pytest.mark.asyncio
async def test_scheduled_scan_continues_after_failure(idea_session_maker):
    page_source = _PerUrlPageSource(failing={"https://wiki.example/Broken"})

    result = await run_scheduled_scan(
        ["https://wiki.example/Notion", "https://wiki.example/Broken", "https://wiki.example/Jira", "  "],
        session_maker=idea_session_maker,
        page_source=page_source,
        completion=_NamedCompletion(),
    )

    assert page_source.calls == [
        "https://wiki.example/Notion",
        "https://wiki.example/Broken",
        "https://wiki.example/Jira",
    ]
    assert result["failed"] == ["https://wiki.example/Broken"]
    assert len(result["scanned"]) == 2

    async with idea_session_maker() as session:
        rows = (await session.execute(select(Idea))).scalars().all()
    assert sorted(row.competitor_name for row in rows) == ["Jira", "Notion"]
    assert {row.id for row in rows} == set(result["scanned"])


@pytest.mark.asyncio
async def test_scheduled_scan_with_no_targets_is_a_noop(idea_session_maker):
    result = await run_scheduled_scan([], session_maker=idea_session_maker)
    assert result == {"scanned": [], "failed": []}


@pytest.mark.asyncio
async def test_scheduled_scan_defaults_to_configured_targets(idea_session_maker):
    page_source = _PerUrlPageSource(failing=set())

    result = await run_scheduled_scan(
        session_maker=idea_session_maker,
        page_source=page_source,
        completion=_NamedCompletion(),
    )

    assert page_source.calls == [
        "https://en.wikipedia.org/wiki/Notion_(app)",
        "https://en.wikipedia.org/wiki/Jira",
    ]
    assert result["failed"] == []
    assert len(result["scanned"]) == 2
