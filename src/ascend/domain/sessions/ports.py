"""
Ports (interfaces) for session storage.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import date

from ascend.domain.grades import Discipline

from .models import SessionRecord


class SessionStore(ABC):
    """
    Port for reading and mutating the logbook.

    Implementations:
        - FileSessionStore: JSON/YAML logbook file on disk.
        - ApiSessionStore: Remote sessions API over HTTP.

    Every read returns a fresh list; callers treat it as an immutable
    snapshot for the duration of one computation.
    """

    @abstractmethod
    async def list_sessions(
        self, discipline: Discipline | None = None, on: date | None = None
    ) -> list[SessionRecord]:
        """
        Fetch all stored sessions, optionally narrowed server-side.

        Args:
            discipline: Only return sessions of this discipline.
            on: Only return sessions logged on this date.
        """
        pass

    @abstractmethod
    async def get_session(self, session_id: str) -> SessionRecord:
        """
        Fetch one session.

        Raises:
            SessionNotFoundError: No session has this id.
        """
        pass

    @abstractmethod
    async def create_session(self, record: SessionRecord) -> SessionRecord:
        """
        Persist a new session. The store assigns the id.

        Returns:
            The stored record, with ``id`` populated.
        """
        pass

    @abstractmethod
    async def replace_session(self, session_id: str, record: SessionRecord) -> SessionRecord:
        """
        Replace the session stored under ``session_id``.

        Raises:
            SessionNotFoundError: No session has this id.
        """
        pass

    @abstractmethod
    async def delete_session(self, session_id: str) -> None:
        """
        Remove a session.

        Raises:
            SessionNotFoundError: No session has this id.
        """
        pass

    async def close(self) -> None:
        """Release any held resources. No-op by default."""
        return None
