"""
Admission-time validation for session records.

Nothing here has side effects: a call either returns a validated
``SessionRecord`` or raises a ``SessionValidationError`` subclass.
"""

from datetime import date, datetime

from ascend.domain.errors import InvalidDateError, InvalidGradeError, SessionValidationError
from ascend.domain.grades import Discipline, GradeScale, coerce_discipline

from .models import SessionRecord

_SCALE = GradeScale()


def parse_calendar_date(value: date | str) -> date:
    """
    Parse an ISO 8601 calendar date.

    Full datetimes are accepted and truncated to their date; whether the
    date is plausible (e.g. not in the future) is left to the caller.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(value)

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError as e:
        raise InvalidDateError(value) from e


def new_session_record(
    discipline: Discipline | str,
    grade: str,
    date: date | str,
    sent: bool,
    notes: str | None = None,
    id: str | None = None,
    scale: GradeScale | None = None,
) -> SessionRecord:
    """
    Validate the fields of a climb and build an immutable record.

    Raises:
        InvalidDisciplineError: Unknown discipline.
        InvalidGradeError: Grade is not a label in the discipline's vocabulary.
        InvalidDateError: Date is not a real calendar date.
        SessionValidationError: ``sent`` is not a bool or ``notes`` is not text.
    """
    scale = scale or _SCALE
    discipline = coerce_discipline(discipline)
    # Records carry the label exactly as given
    if not isinstance(grade, str):
        raise InvalidGradeError(discipline, grade)
    scale.parse(discipline, grade)
    parsed_date = parse_calendar_date(date)

    if not isinstance(sent, bool):
        raise SessionValidationError(f"sent must be a boolean, got {sent!r}")
    if notes is not None and not isinstance(notes, str):
        raise SessionValidationError(f"notes must be text, got {type(notes).__name__}")

    return SessionRecord(
        discipline=discipline,
        grade=grade,
        date=parsed_date,
        sent=sent,
        notes=notes,
        id=id,
    )
