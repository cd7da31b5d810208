"""
Idea Factory - FastAPI Backend
Main application entry point: competitor scans, landing page generation and views.
"""

import asyncio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from config import settings
from database import engine, Base
import models  # noqa: F401
from routers import dashboard, health, ideas
from services.scheduler import run_scheduled_scan


async def _periodic_competitor_scan() -> None:
    interval_minutes = max(int(settings.SCAN_INTERVAL_MINUTES), 0)
    if interval_minutes <= 0:
        return
    while True:
        await asyncio.sleep(interval_minutes * 60)
        try:
            result = await run_scheduled_scan()
            print(
                f"🔍 Scheduled scan: scanned={len(result.get('scanned', []))} "
                f"failed={len(result.get('failed', []))}"
            )
        except Exception as exc:
            print(f"⚠️ Scheduled scan tick failed: {exc}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    print("🚀 Starting Idea Factory API...")
    if settings.AUTO_CREATE_DB_SCHEMA:
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            print("🗄️ Database schema verified.")
        except Exception as e:
            print(f"⚠️ Database bootstrap skipped: {e}")
    scan_task = None
    if int(settings.SCAN_INTERVAL_MINUTES) > 0 and settings.SCAN_TARGETS:
        scan_task = asyncio.create_task(_periodic_competitor_scan())
        print(
            "📅 Competitor scan loop enabled "
            f"(every {int(settings.SCAN_INTERVAL_MINUTES)} min, {len(settings.SCAN_TARGETS)} targets)."
        )
    yield
    # Shutdown
    if scan_task is not None:
        scan_task.cancel()
        try:
            await scan_task
        except asyncio.CancelledError:
            pass
    print("👋 Shutting down API...")


app = FastAPI(
    title="Idea Factory API",
    description="Turn competitor pages into weaknesses and weaknesses into monetized landing pages",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(ideas.router, tags=["Ideas"])
app.include_router(dashboard.router, tags=["Dashboard"])

