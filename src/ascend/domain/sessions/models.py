"""
Domain model for a logged climb.

Pure data with no I/O. Construct records through
``ascend.domain.sessions.validation.new_session_record`` so the
grade/discipline invariant is enforced on admission.
"""

from dataclasses import dataclass
from datetime import date

from ascend.domain.grades import Discipline


@dataclass(frozen=True)
class SessionRecord:
    """
    One logged climbing attempt.

    Attributes:
        discipline: Climbing style; decides which grade vocabulary applies.
        grade: Grade label exactly as submitted (e.g. "V5", "5.11a").
        date: Calendar date of the climb.
        sent: Whether the route/problem was completed without falling.
        notes: Optional free text, never analyzed.
        id: Opaque identifier assigned by the store; None until stored.
    """

    discipline: Discipline
    grade: str
    date: date
    sent: bool
    notes: str | None = None
    id: str | None = None
