"""
Router for competitor scans, landing page generation and published page views.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from database import get_db
from models.idea import Idea
from services.analysis import analyze_competitor
from services.collaborators import get_completion_client, get_page_source, get_payment_issuer
from services.errors import PipelineError
from services.idea_store import SqlIdeaStore
from services.publication import publish_idea

router = APIRouter()
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    "fetch_failed": 502,
    "model_call_failed": 502,
    "no_structured_data_found": 422,
    "malformed_structured_data": 422,
    "missing_required_field": 422,
    "record_not_found": 404,
    "payment_link_failed": 502,
}


# ==================== Pydantic Models ====================

class ScanRequest(BaseModel):
    url: str


class IdeaResponse(BaseModel):
    id: str
    source_url: str
    competitor_name: str
    weaknesses: List[str]
    is_published: bool
    created_at: Optional[datetime] = None
    published_at: Optional[datetime] = None


def _pipeline_http_error(exc: PipelineError) -> HTTPException:
    return HTTPException(status_code=ERROR_STATUS.get(exc.kind, 500), detail=exc.as_payload())


def _view_url(idea_id: str) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/view/{idea_id}"


def _serialize(idea: Idea) -> IdeaResponse:
    return IdeaResponse(
        id=idea.id,
        source_url=idea.source_url,
        competitor_name=idea.competitor_name,
        weaknesses=list(idea.weaknesses or []),
        is_published=idea.is_published,
        created_at=idea.created_at,
        published_at=idea.published_at,
    )


async def _scan(url: str, db: AsyncSession) -> dict:
    try:
        result = await analyze_competitor(
            url,
            store=SqlIdeaStore(db),
            page_source=get_page_source(),
            completion=get_completion_client(),
        )
    except PipelineError as exc:
        logger.warning("Scan failed for %s: %s %s", url, exc.kind, exc.detail)
        raise _pipeline_http_error(exc)
    except Exception:
        logger.exception("Unexpected scan failure for %s", url)
        raise HTTPException(status_code=500, detail={"error": "scan_failed", "details": "Unexpected error"})
    return {"message": "Saved!", **result.as_response()}


async def _publish(idea_id: str, db: AsyncSession) -> dict:
    try:
        result = await publish_idea(
            idea_id,
            store=SqlIdeaStore(db),
            completion=get_completion_client(),
            payments=get_payment_issuer(),
        )
    except PipelineError as exc:
        logger.warning("Publish failed for idea %s: %s %s", idea_id, exc.kind, exc.detail)
        raise _pipeline_http_error(exc)
    except Exception:
        logger.exception("Unexpected publish failure for idea %s", idea_id)
        raise HTTPException(status_code=500, detail={"error": "publish_failed", "details": "Unexpected error"})
    return {"message": "LP Generated!", **result.as_response(), "view_url": _view_url(result.idea_id)}


@router.get("/scan")
async def scan_get(
    url: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    """Scan a competitor page and store the extracted weaknesses."""
    if not url:
        raise HTTPException(status_code=400, detail={"error": "URL required"})
    return await _scan(url, db)


@router.post("/scan")
async def scan_post(request: ScanRequest, db: AsyncSession = Depends(get_db)):
    return await _scan(request.url, db)


@router.get("/generate-lp")
async def generate_landing_page(
    id: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    """Generate (or regenerate) the landing page for an idea."""
    if not id:
        raise HTTPException(status_code=400, detail={"error": "Idea ID required"})
    return await _publish(id, db)


@router.post("/ideas/{idea_id}/publish")
async def publish(idea_id: str, db: AsyncSession = Depends(get_db)):
    return await _publish(idea_id, db)


@router.get("/ideas", response_model=List[IdeaResponse])
async def list_ideas(db: AsyncSession = Depends(get_db)):
    ideas = await SqlIdeaStore(db).list()
    return [_serialize(idea) for idea in ideas]


@router.get("/view/{idea_id}", response_class=HTMLResponse)
async def view_landing_page(idea_id: str, db: AsyncSession = Depends(get_db)):
    idea = await SqlIdeaStore(db).get(idea_id)
    if not idea or not idea.is_published:
        return PlainTextResponse("Not generated", status_code=404)
    return HTMLResponse(idea.published_markup)
