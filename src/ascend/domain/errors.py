"""
Error taxonomy for the Ascend logbook.

Validation errors are raised when a record is admitted; aggregation code
re-raises them unchanged if a corrupt record slips through.
"""


class AscendError(Exception):
    """Base class for all Ascend errors."""


class SessionValidationError(AscendError, ValueError):
    """A session field failed admission-time validation."""


class InvalidDisciplineError(SessionValidationError):
    """The discipline is not one of BOULDER, LEAD or TOPROPE."""

    def __init__(self, discipline: object):
        self.discipline = discipline
        super().__init__(f"Unknown discipline: {discipline!r}")


class InvalidGradeError(SessionValidationError):
    """The grade label is not in the vocabulary used by the discipline."""

    def __init__(self, discipline: object, grade: object):
        self.discipline = discipline
        self.grade = grade
        name = getattr(discipline, "value", discipline)
        super().__init__(f"Grade {grade!r} is not valid for discipline {name}")


class InvalidDateError(SessionValidationError):
    """The date is not a real calendar date."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Not a valid calendar date: {value!r}")


class StoreError(AscendError):
    """The session store failed to serve a request."""


class SessionNotFoundError(StoreError, KeyError):
    """No session with the requested id exists in the store."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")

    def __str__(self) -> str:
        return f"Session not found: {self.session_id}"
