"""
Analytics engine for deriving progress statistics from logged sessions.

This is a pure computation module with no I/O. Every method maps an input
sequence to a fresh result; iteration order only matters where ties are
broken (highest grade keeps the first occurrence).
"""

from collections.abc import Iterable, Sequence
from datetime import date

from ascend.domain.analytics.models import (
    NO_DATA,
    AnalyticsSnapshot,
    Bucketing,
    GroupSummary,
    NoData,
    Overview,
    ProgressBucket,
)
from ascend.domain.constants import ISO_WEEK_KEY_FORMAT, MONTH_KEY_FORMAT
from ascend.domain.grades import Discipline, GradeScale
from ascend.domain.sessions.models import SessionRecord


def bucket_key(day: date, bucketing: Bucketing) -> str:
    """Return the "YYYY-Www" or "YYYY-MM" key a date falls into."""
    if bucketing is Bucketing.WEEK:
        iso = day.isocalendar()
        return ISO_WEEK_KEY_FORMAT.format(year=iso.year, week=iso.week)
    return MONTH_KEY_FORMAT.format(year=day.year, month=day.month)


class AnalyticsEngine:
    """
    Computes aggregate views over a collection of SessionRecord.

    Stateless and side-effect free. Records are assumed to have been
    validated on admission; an invalid grade/discipline pair here raises
    InvalidGradeError instead of being skipped.
    """

    def __init__(self, scale: GradeScale | None = None):
        self._scale = scale or GradeScale()

    def compute_overview(self, records: Sequence[SessionRecord]) -> Overview:
        """
        Totals across all sessions.

        An empty input yields ``total_sessions == 0`` with NO_DATA for the
        average and sent percentage.
        """
        records = list(records)
        ranks = self._ranks(records)
        if not records:
            return Overview(total_sessions=0, average_difficulty=NO_DATA, sent_percentage=NO_DATA)

        return Overview(
            total_sessions=len(records),
            average_difficulty=_mean(ranks),
            sent_percentage=_sent_fraction(records),
        )

    def compute_by_discipline(
        self, records: Sequence[SessionRecord]
    ) -> dict[Discipline, GroupSummary]:
        """
        Per-discipline count, mean rank and sent fraction.

        Disciplines with no sessions are left out of the result entirely.
        """
        return {
            discipline: self._summarize(group)
            for discipline, group in self._group_by_discipline(records).items()
        }

    def compute_highest_grades(
        self, records: Sequence[SessionRecord]
    ) -> dict[Discipline, str | NoData]:
        """Hardest grade logged per discipline, NO_DATA where there are none."""
        groups = self._group_by_discipline(records)
        result: dict[Discipline, str | NoData] = {}
        for discipline in Discipline:
            group = groups.get(discipline)
            if not group:
                result[discipline] = NO_DATA
                continue
            result[discipline] = self._scale.max_grade(discipline, [r.grade for r in group])
        return result

    def compute_average_grades(
        self, records: Sequence[SessionRecord]
    ) -> dict[Discipline, float | NoData]:
        """Mean difficulty rank per discipline, NO_DATA where there are none."""
        groups = self._group_by_discipline(records)
        result: dict[Discipline, float | NoData] = {}
        for discipline in Discipline:
            group = groups.get(discipline)
            result[discipline] = _mean(self._ranks(group)) if group else NO_DATA
        return result

    def compute_progress_series(
        self, records: Sequence[SessionRecord], bucketing: Bucketing | str = Bucketing.WEEK
    ) -> list[ProgressBucket]:
        """
        Bucket sessions by ISO week or calendar month.

        Only occupied buckets are emitted, ordered by key ascending. The
        mean rank pools every discipline into one trend line even though
        V-scale and YDS ranks are not comparable; this keeps a single
        overall progress view and is intentionally approximate.
        """
        bucketing = Bucketing(bucketing)
        buckets: dict[str, list[SessionRecord]] = {}
        for record in records:
            buckets.setdefault(bucket_key(record.date, bucketing), []).append(record)

        series = []
        for key in sorted(buckets):
            summary = self._summarize(buckets[key])
            series.append(
                ProgressBucket(
                    key=key,
                    session_count=summary.session_count,
                    average_difficulty=summary.average_difficulty,
                    sent_percentage=summary.sent_percentage,
                )
            )
        return series

    def compute_snapshot(self, records: Sequence[SessionRecord]) -> AnalyticsSnapshot:
        """Compute every view over the same records."""
        records = list(records)
        return AnalyticsSnapshot(
            overview=self.compute_overview(records),
            by_discipline=self.compute_by_discipline(records),
            highest_grades=self.compute_highest_grades(records),
            average_grades=self.compute_average_grades(records),
            weekly=self.compute_progress_series(records, Bucketing.WEEK),
            monthly=self.compute_progress_series(records, Bucketing.MONTH),
        )

    def _ranks(self, records: Iterable[SessionRecord]) -> list[float]:
        return [self._scale.rank_of(r.discipline, r.grade) for r in records]

    def _summarize(self, group: list[SessionRecord]) -> GroupSummary:
        return GroupSummary(
            session_count=len(group),
            average_difficulty=_mean(self._ranks(group)),
            sent_percentage=_sent_fraction(group),
        )

    @staticmethod
    def _group_by_discipline(
        records: Iterable[SessionRecord],
    ) -> dict[Discipline, list[SessionRecord]]:
        groups: dict[Discipline, list[SessionRecord]] = {}
        for record in records:
            groups.setdefault(record.discipline, []).append(record)
        return groups


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


def _sent_fraction(records: Sequence[SessionRecord]) -> float:
    return sum(1 for r in records if r.sent) / len(records)
