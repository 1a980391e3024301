"""
Analytics Service — Application layer orchestrator.

Fetches a snapshot of sessions from the store and hands it to the engine.
"""

import logging

from ascend.domain.analytics.models import (
    AnalyticsSnapshot,
    Bucketing,
    GroupSummary,
    NoData,
    Overview,
    ProgressBucket,
)
from ascend.domain.grades import Discipline
from ascend.domain.sessions.models import SessionRecord
from ascend.domain.sessions.ports import SessionStore

from .engine import AnalyticsEngine

logger = logging.getLogger(__name__)


class AnalyticsService:
    """
    Application service for computing analytics over the logbook.

    Depends on the SessionStore abstraction, not a concrete adapter. Each
    call reads its own snapshot; nothing is cached between calls.
    """

    def __init__(self, store: SessionStore, engine: AnalyticsEngine | None = None):
        """
        Args:
            store: The repository (port) the sessions are read from.
            engine: Optional custom engine; uses default if not provided.
        """
        self._store = store
        self._engine = engine or AnalyticsEngine()

    async def _snapshot_records(self) -> list[SessionRecord]:
        records = await self._store.list_sessions()
        logger.debug(f"Loaded {len(records)} sessions for analytics")
        return records

    async def snapshot(self) -> AnalyticsSnapshot:
        return self._engine.compute_snapshot(await self._snapshot_records())

    async def overview(self) -> Overview:
        return self._engine.compute_overview(await self._snapshot_records())

    async def by_discipline(self) -> dict[Discipline, GroupSummary]:
        return self._engine.compute_by_discipline(await self._snapshot_records())

    async def highest_grades(self) -> dict[Discipline, str | NoData]:
        return self._engine.compute_highest_grades(await self._snapshot_records())

    async def average_grades(self) -> dict[Discipline, float | NoData]:
        return self._engine.compute_average_grades(await self._snapshot_records())

    async def progress(self, bucketing: Bucketing | str = Bucketing.WEEK) -> list[ProgressBucket]:
        return self._engine.compute_progress_series(await self._snapshot_records(), bucketing)
