"""
Wire shape of a session and its conversion to the domain record.

Anything loosely typed (JSON from the sessions API, entries of a logbook
file) passes through ``record_from_payload`` before reaching analytics.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, ValidationError, field_validator

from ascend.domain.errors import SessionValidationError
from ascend.domain.grades import GradeScale
from ascend.domain.sessions.models import SessionRecord
from ascend.domain.sessions.validation import new_session_record


class SessionPayload(BaseModel):
    """A session as it appears on the wire: ``{id, discipline, grade, date, notes?, sent}``."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    discipline: str
    grade: str
    date: Any
    notes: str | None = None
    sent: StrictBool

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> str | None:
        if v is None:
            return None
        return str(v)

    def to_record(self, scale: GradeScale | None = None) -> SessionRecord:
        return new_session_record(
            discipline=self.discipline,
            grade=self.grade,
            date=self.date,
            sent=self.sent,
            notes=self.notes,
            id=self.id,
            scale=scale,
        )


def record_from_payload(data: Any, scale: GradeScale | None = None) -> SessionRecord:
    """
    Convert a loosely typed mapping into a validated SessionRecord.

    Raises:
        SessionValidationError: Missing or mistyped fields, or any of its
            subclasses for grade, discipline and date violations.
    """
    try:
        payload = SessionPayload.model_validate(data)
    except ValidationError as e:
        raise SessionValidationError(f"Malformed session payload: {e}") from e
    return payload.to_record(scale)


def record_to_payload(record: SessionRecord, include_id: bool = True) -> dict[str, Any]:
    """Render a record in the wire shape. ``notes`` is omitted when unset."""
    data: dict[str, Any] = {}
    if include_id and record.id is not None:
        data["id"] = record.id
    data["discipline"] = record.discipline.value
    data["grade"] = record.grade
    data["date"] = record.date.isoformat()
    if record.notes is not None:
        data["notes"] = record.notes
    data["sent"] = record.sent
    return data
