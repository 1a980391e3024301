"""
Domain models for session analytics.

These are derived values computed fresh from a snapshot of records. They
hold no reference back to the records they were computed from.
"""

from dataclasses import dataclass, field
from enum import Enum

from ascend.domain.grades import Discipline


class NoData(Enum):
    """
    Marker for a statistic whose input population is empty.

    Distinct from 0 and NaN so "no sessions" cannot be read as
    "average difficulty zero" or "0% sent".
    """

    NO_DATA = "no-data"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_DATA"


NO_DATA = NoData.NO_DATA


class Bucketing(str, Enum):
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class Overview:
    """
    Totals across every session.

    Attributes:
        total_sessions: Number of sessions.
        average_difficulty: Mean difficulty rank, pooled across disciplines.
        sent_percentage: Fraction of sessions sent, 0.0-1.0.
    """

    total_sessions: int
    average_difficulty: float | NoData
    sent_percentage: float | NoData


@dataclass(frozen=True)
class GroupSummary:
    """Count, mean rank and sent fraction for a non-empty group of sessions."""

    session_count: int
    average_difficulty: float
    sent_percentage: float


@dataclass(frozen=True)
class ProgressBucket:
    """
    One occupied period of a progress series.

    ``key`` is "YYYY-Www" (ISO week) or "YYYY-MM" (calendar month). The mean
    pools V-scale and YDS ranks into a single trend line, which is an
    approximation: the two scales are not comparable.
    """

    key: str
    session_count: int
    average_difficulty: float
    sent_percentage: float


@dataclass
class AnalyticsSnapshot:
    """Every analytics view computed over the same input."""

    overview: Overview
    by_discipline: dict[Discipline, GroupSummary] = field(default_factory=dict)
    highest_grades: dict[Discipline, str | NoData] = field(default_factory=dict)
    average_grades: dict[Discipline, float | NoData] = field(default_factory=dict)
    weekly: list[ProgressBucket] = field(default_factory=list)
    monthly: list[ProgressBucket] = field(default_factory=list)
