"""
Session Service — Application layer orchestrator for logbook CRUD.

Every record is validated before the store sees it. Records are immutable,
so edits build a new record and replace the stored one.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from ascend.domain.errors import SessionValidationError
from ascend.domain.grades import Discipline, GradeScale, coerce_discipline
from ascend.domain.sessions.models import SessionRecord
from ascend.domain.sessions.ports import SessionStore
from ascend.domain.sessions.validation import new_session_record, parse_calendar_date

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("discipline", "grade", "date", "sent", "notes")


def filter_sessions(
    records: Iterable[SessionRecord],
    query: str | None = None,
    discipline: Discipline | str | None = None,
    on: date | str | None = None,
) -> list[SessionRecord]:
    """
    Narrow a list of sessions, keeping input order.

    Args:
        query: Case-insensitive substring matched against grade and notes.
        discipline: Keep only this discipline.
        on: Keep only sessions logged on this date.
    """
    wanted_discipline = coerce_discipline(discipline) if discipline is not None else None
    wanted_date = parse_calendar_date(on) if on is not None else None
    needle = query.lower() if query else None

    result = []
    for record in records:
        if wanted_discipline is not None and record.discipline != wanted_discipline:
            continue
        if wanted_date is not None and record.date != wanted_date:
            continue
        if needle is not None:
            in_grade = needle in record.grade.lower()
            in_notes = record.notes is not None and needle in record.notes.lower()
            if not (in_grade or in_notes):
                continue
        result.append(record)
    return result


def apply_session_update(
    record: SessionRecord, changes: Mapping[str, Any], scale: GradeScale | None = None
) -> SessionRecord:
    """
    Return a new, re-validated record with ``changes`` applied.

    Only keys present in ``changes`` are touched, so ``{"notes": None}``
    clears the notes. Changing the discipline without a matching grade
    fails validation.
    """
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise SessionValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

    merged = {name: getattr(record, name) for name in UPDATABLE_FIELDS}
    merged.update(changes)
    return new_session_record(id=record.id, scale=scale, **merged)


class SessionService:
    """
    Application service for reading and editing the logbook.

    Follows Dependency Inversion: depends on the SessionStore abstraction,
    not concrete adapter implementations.
    """

    def __init__(self, store: SessionStore, scale: GradeScale | None = None):
        self._store = store
        self._scale = scale or GradeScale()

    async def list_sessions(
        self,
        discipline: Discipline | str | None = None,
        on: date | str | None = None,
        query: str | None = None,
    ) -> list[SessionRecord]:
        """Fetch sessions, filtered by discipline, date and free-text query."""
        wanted_discipline = coerce_discipline(discipline) if discipline is not None else None
        wanted_date = parse_calendar_date(on) if on is not None else None

        records = await self._store.list_sessions(discipline=wanted_discipline, on=wanted_date)
        return filter_sessions(records, query=query, discipline=wanted_discipline, on=wanted_date)

    async def get_session(self, session_id: str) -> SessionRecord:
        return await self._store.get_session(session_id)

    async def add_session(
        self,
        discipline: Discipline | str,
        grade: str,
        date: date | str,
        sent: bool,
        notes: str | None = None,
    ) -> SessionRecord:
        record = new_session_record(
            discipline=discipline,
            grade=grade,
            date=date,
            sent=sent,
            notes=notes,
            scale=self._scale,
        )
        stored = await self._store.create_session(record)
        logger.info(
            f"Logged {stored.discipline.value} {stored.grade} on {stored.date} ({stored.id})"
        )
        return stored

    async def update_session(self, session_id: str, changes: Mapping[str, Any]) -> SessionRecord:
        """Apply a partial update to a stored session."""
        current = await self._store.get_session(session_id)
        updated = apply_session_update(current, changes, scale=self._scale)
        stored = await self._store.replace_session(session_id, updated)
        logger.info(f"Updated session {session_id}: {', '.join(sorted(changes)) or 'no changes'}")
        return stored

    async def replace_session(
        self,
        session_id: str,
        discipline: Discipline | str,
        grade: str,
        date: date | str,
        sent: bool,
        notes: str | None = None,
    ) -> SessionRecord:
        record = new_session_record(
            discipline=discipline,
            grade=grade,
            date=date,
            sent=sent,
            notes=notes,
            id=session_id,
            scale=self._scale,
        )
        return await self._store.replace_session(session_id, record)

    async def delete_session(self, session_id: str) -> None:
        await self._store.delete_session(session_id)
        logger.info(f"Deleted session {session_id}")
