"""Periodic re-scan of the configured competitor target list."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from config import settings
from database import async_session_maker
from services.analysis import analyze_competitor
from services.errors import PipelineError
from services.idea_store import SqlIdeaStore
from services.ports import CompletionClient, PageSource

logger = logging.getLogger(__name__)


async def run_scheduled_scan(
    targets: Optional[Iterable[str]] = None,
    *,
    session_maker: Optional[async_sessionmaker[AsyncSession]] = None,
    page_source: Optional[PageSource] = None,
    completion: Optional[CompletionClient] = None,
) -> Dict[str, List[Any]]:
    """Scan each target in order; one failing target does not stop the rest."""
    urls = [str(url).strip() for url in (targets if targets is not None else settings.SCAN_TARGETS)]
    maker = session_maker or async_session_maker
    scanned: List[str] = []
    failed: List[str] = []

    for url in urls:
        if not url:
            continue
        try:
            async with maker() as db:
                result = await analyze_competitor(
                    url,
                    store=SqlIdeaStore(db),
                    page_source=page_source,
                    completion=completion,
                )
            scanned.append(result.id)
            logger.info("Scanned: %s", url)
        except PipelineError as exc:
            failed.append(url)
            logger.warning("Scheduled scan failed for %s: %s %s", url, exc.kind, exc.detail)
        except Exception:
            failed.append(url)
            logger.exception("Scheduled scan crashed for %s", url)

    return {"scanned": scanned, "failed": failed}
