import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ascend.application.analytics.export import (
    breakdown_to_dict,
    overview_to_dict,
    per_discipline_to_dict,
    series_to_list,
)
from ascend.application.analytics.service import AnalyticsService
from ascend.application.config import AppConfig, resolve_config
from ascend.application.factory import get_session_store
from ascend.consts import VERSION
from ascend.domain.errors import AscendError, StoreError
from ascend.domain.grades import Discipline, GradeScale
from ascend.domain.sessions.ports import SessionStore

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("ascend.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Ascend Server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("Ascend Server shutting down...")


app = FastAPI(
    title="Ascend Server",
    description="Progress analytics over a climbing logbook.",
    version=VERSION,
    lifespan=lifespan,
)

start_time = time.time()


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def get_config() -> AppConfig:
    return resolve_config()


async def get_store(config: AppConfig = Depends(get_config)) -> AsyncIterator[SessionStore]:
    """One store per request, built from explicit config and closed afterwards."""
    store = get_session_store(config)
    try:
        yield store
    finally:
        await store.close()


def get_analytics(store: SessionStore = Depends(get_store)) -> AnalyticsService:
    return AnalyticsService(store)


@app.exception_handler(AscendError)
async def ascend_error_handler(request: Request, exc: AscendError) -> JSONResponse:
    # Bad records in the store are an upstream defect; surface them loudly.
    status = 502 if isinstance(exc, StoreError) else 500
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status, content={"detail": str(exc)})


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class OverviewResponse(BaseModel):
    total_sessions: int
    average_difficulty: float | None
    sent_percentage: float | None


class GroupSummaryResponse(BaseModel):
    session_count: int
    average_difficulty: float
    sent_percentage: float


class AnalyticsResponse(BaseModel):
    overview: OverviewResponse
    # Disciplines without sessions are absent, never zero
    by_discipline: dict[str, GroupSummaryResponse]


class ProgressBucketResponse(BaseModel):
    key: str
    session_count: int
    average_difficulty: float
    sent_percentage: float


class ProgressResponse(BaseModel):
    overview: OverviewResponse
    progress_by_week: list[ProgressBucketResponse]
    progress_by_month: list[ProgressBucketResponse]


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


@app.get("/grades/{discipline}", response_model=list[str])
async def list_grades(discipline: Discipline):
    """Grade labels for a discipline, easiest first."""
    return GradeScale().grades_for(discipline)


@app.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics_summary(service: AnalyticsService = Depends(get_analytics)):
    snapshot = await service.snapshot()
    return AnalyticsResponse(
        overview=OverviewResponse(**overview_to_dict(snapshot.overview)),
        by_discipline={
            name: GroupSummaryResponse(**summary)
            for name, summary in breakdown_to_dict(snapshot.by_discipline).items()
        },
    )


@app.get("/stats/highest", response_model=dict[str, str | None])
async def get_highest_grades(service: AnalyticsService = Depends(get_analytics)):
    return per_discipline_to_dict(await service.highest_grades())


@app.get("/stats/average", response_model=dict[str, float | None])
async def get_average_grades(service: AnalyticsService = Depends(get_analytics)):
    return per_discipline_to_dict(await service.average_grades())


@app.get("/stats/progress", response_model=ProgressResponse)
async def get_progress(service: AnalyticsService = Depends(get_analytics)):
    snapshot = await service.snapshot()
    return ProgressResponse(
        overview=OverviewResponse(**overview_to_dict(snapshot.overview)),
        progress_by_week=[ProgressBucketResponse(**b) for b in series_to_list(snapshot.weekly)],
        progress_by_month=[ProgressBucketResponse(**b) for b in series_to_list(snapshot.monthly)],
    )
