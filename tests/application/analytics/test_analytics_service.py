from unittest.mock import AsyncMock, MagicMock

import pytest

from ascend.application.analytics.engine import AnalyticsEngine
from ascend.application.analytics.export import snapshot_to_dict
from ascend.application.analytics.service import AnalyticsService
from ascend.domain.analytics.models import NO_DATA, Bucketing
from ascend.domain.grades import Discipline


@pytest.fixture
def mock_store(sample_records):
    store = AsyncMock()
    store.list_sessions.return_value = sample_records
    return store


@pytest.mark.asyncio
async def test_overview_reads_store_snapshot(mock_store):
    service = AnalyticsService(store=mock_store)

    overview = await service.overview()

    assert overview.total_sessions == 4
    mock_store.list_sessions.assert_awaited_once_with()


@pytest.mark.asyncio
async def test_each_call_reads_a_fresh_snapshot(mock_store, make_record):
    service = AnalyticsService(store=mock_store)

    first = await service.highest_grades()
    mock_store.list_sessions.return_value = [make_record("V9")]
    second = await service.highest_grades()

    assert first[Discipline.BOULDER] == "V6"
    assert second[Discipline.BOULDER] == "V9"
    assert second[Discipline.LEAD] is NO_DATA
    assert mock_store.list_sessions.await_count == 2


@pytest.mark.asyncio
async def test_progress_delegates_bucketing(mock_store, sample_records):
    engine = MagicMock(spec=AnalyticsEngine)
    service = AnalyticsService(store=mock_store, engine=engine)

    await service.progress(Bucketing.MONTH)

    engine.compute_progress_series.assert_called_once_with(sample_records, Bucketing.MONTH)


@pytest.mark.asyncio
async def test_snapshot_over_empty_store(memory_store):
    service = AnalyticsService(store=memory_store)

    snapshot = await service.snapshot()
    data = snapshot_to_dict(snapshot)

    assert data["overview"] == {
        "total_sessions": 0,
        "average_difficulty": None,
        "sent_percentage": None,
    }
    assert data["by_discipline"] == {}
    assert data["highest_grades"] == {"BOULDER": None, "LEAD": None, "TOPROPE": None}
    assert data["progress_by_week"] == []


@pytest.mark.asyncio
async def test_breakdown_and_averages(seeded_store):
    service = AnalyticsService(store=seeded_store)

    breakdown = await service.by_discipline()
    averages = await service.average_grades()

    assert set(breakdown) == {Discipline.BOULDER, Discipline.LEAD, Discipline.TOPROPE}
    assert averages[Discipline.TOPROPE] == 10.5
