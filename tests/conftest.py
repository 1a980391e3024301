from dataclasses import replace

import pytest

from ascend.domain.errors import SessionNotFoundError
from ascend.domain.grades import Discipline
from ascend.domain.sessions.models import SessionRecord
from ascend.domain.sessions.ports import SessionStore
from ascend.domain.sessions.validation import new_session_record


class InMemorySessionStore(SessionStore):
    """Dict-backed store for exercising services without I/O."""

    def __init__(self, records: list[SessionRecord] | None = None):
        self.records: dict[str, SessionRecord] = {}
        self.closed = False
        self._next_id = 1
        for record in records or []:
            self._put(record)

    def _put(self, record: SessionRecord) -> SessionRecord:
        if record.id is None:
            record = replace(record, id=f"s{self._next_id}")
            self._next_id += 1
        self.records[record.id] = record
        return record

    async def list_sessions(self, discipline=None, on=None):
        return [
            r
            for r in self.records.values()
            if (discipline is None or r.discipline == discipline) and (on is None or r.date == on)
        ]

    async def get_session(self, session_id):
        if session_id not in self.records:
            raise SessionNotFoundError(session_id)
        return self.records[session_id]

    async def create_session(self, record):
        return self._put(replace(record, id=None))

    async def replace_session(self, session_id, record):
        if session_id not in self.records:
            raise SessionNotFoundError(session_id)
        stored = replace(record, id=session_id)
        self.records[session_id] = stored
        return stored

    async def delete_session(self, session_id):
        if session_id not in self.records:
            raise SessionNotFoundError(session_id)
        del self.records[session_id]

    async def close(self):
        self.closed = True


@pytest.fixture
def make_record():
    """Build a validated record with sensible defaults."""

    def _make(
        grade="V3",
        discipline=Discipline.BOULDER,
        day="2025-01-06",
        sent=True,
        notes=None,
        id=None,
    ):
        return new_session_record(
            discipline=discipline, grade=grade, date=day, sent=sent, notes=notes, id=id
        )

    return _make


@pytest.fixture
def memory_store():
    return InMemorySessionStore()


@pytest.fixture
def sample_records(make_record):
    return [
        make_record("V2", day="2025-01-02", sent=True, notes="Warm-up slab", id="a"),
        make_record("V6", day="2025-01-03", sent=False, notes="Crimpy roof", id="b"),
        make_record(
            "5.11a", Discipline.LEAD, day="2025-01-09", sent=True, notes="Onsight", id="c"
        ),
        make_record("5.10c", Discipline.TOPROPE, day="2025-02-14", sent=True, id="d"),
    ]


@pytest.fixture
def seeded_store(sample_records):
    return InMemorySessionStore(sample_records)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Isolate config files and the default logbook location
    monkeypatch.setenv("HOME", str(home))
    for var in (
        "ASCEND_BACKEND",
        "ASCEND_SESSIONS_FILE",
        "ASCEND_API_URL",
        "ASCEND_API_TOKEN",
        "ASCEND_VERBOSE",
    ):
        monkeypatch.delenv(var, raising=False)
    return home
