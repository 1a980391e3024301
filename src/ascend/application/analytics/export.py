"""
Plain-data rendering of analytics results for JSON output.

NO_DATA becomes ``None`` here and nowhere earlier: inside the engine a
missing statistic stays a distinct marker.
"""

from typing import Any

from ascend.domain.analytics.models import (
    AnalyticsSnapshot,
    GroupSummary,
    NoData,
    Overview,
    ProgressBucket,
)
from ascend.domain.grades import Discipline


def metric_value(value: Any) -> Any:
    return None if isinstance(value, NoData) else value


def overview_to_dict(overview: Overview) -> dict[str, Any]:
    return {
        "total_sessions": overview.total_sessions,
        "average_difficulty": metric_value(overview.average_difficulty),
        "sent_percentage": metric_value(overview.sent_percentage),
    }


def breakdown_to_dict(breakdown: dict[Discipline, GroupSummary]) -> dict[str, dict[str, Any]]:
    return {
        discipline.value: {
            "session_count": summary.session_count,
            "average_difficulty": summary.average_difficulty,
            "sent_percentage": summary.sent_percentage,
        }
        for discipline, summary in breakdown.items()
    }


def per_discipline_to_dict(values: dict[Discipline, Any]) -> dict[str, Any]:
    """Highest or average grades keyed by discipline name."""
    return {discipline.value: metric_value(value) for discipline, value in values.items()}


def series_to_list(series: list[ProgressBucket]) -> list[dict[str, Any]]:
    return [
        {
            "key": bucket.key,
            "session_count": bucket.session_count,
            "average_difficulty": bucket.average_difficulty,
            "sent_percentage": bucket.sent_percentage,
        }
        for bucket in series
    ]


def snapshot_to_dict(snapshot: AnalyticsSnapshot) -> dict[str, Any]:
    return {
        "overview": overview_to_dict(snapshot.overview),
        "by_discipline": breakdown_to_dict(snapshot.by_discipline),
        "highest_grades": per_discipline_to_dict(snapshot.highest_grades),
        "average_grades": per_discipline_to_dict(snapshot.average_grades),
        "progress_by_week": series_to_list(snapshot.weekly),
        "progress_by_month": series_to_list(snapshot.monthly),
    }
