"""
File Session Store — Infrastructure adapter for a local logbook file.

Implements SessionStore over a JSON or YAML file holding
``{"sessions": [...]}`` (a bare list is also accepted on read).
"""

import asyncio
import json
import logging
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Any

import yaml
from ulid import ULID

from ascend.application.sessions.payloads import record_from_payload, record_to_payload
from ascend.domain.constants import LOGBOOK_SESSIONS_KEY
from ascend.domain.errors import SessionNotFoundError, SessionValidationError, StoreError
from ascend.domain.grades import Discipline, GradeScale
from ascend.domain.sessions.models import SessionRecord
from ascend.domain.sessions.ports import SessionStore

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def generate_session_id() -> str:
    """Generate a stable session ID using ULID."""
    return str(ULID())


class FileSessionStore(SessionStore):
    """
    Reads and writes sessions from a single logbook file.

    The file is re-read on every call, so each read is a fresh snapshot.
    Writes go through a temporary file and are serialized by a lock.
    """

    def __init__(self, path: Path, scale: GradeScale | None = None):
        self.path = Path(path)
        self._scale = scale or GradeScale()
        self._lock = asyncio.Lock()

    @property
    def is_yaml(self) -> bool:
        return self.path.suffix.lower() in YAML_SUFFIXES

    async def list_sessions(
        self, discipline: Discipline | None = None, on: date | None = None
    ) -> list[SessionRecord]:
        records = self._load()
        if discipline is not None:
            records = [r for r in records if r.discipline == discipline]
        if on is not None:
            records = [r for r in records if r.date == on]
        return records

    async def get_session(self, session_id: str) -> SessionRecord:
        for record in self._load():
            if record.id == session_id:
                return record
        raise SessionNotFoundError(session_id)

    async def create_session(self, record: SessionRecord) -> SessionRecord:
        async with self._lock:
            records = self._load()
            stored = replace(record, id=generate_session_id())
            records.append(stored)
            self._dump(records)
        return stored

    async def replace_session(self, session_id: str, record: SessionRecord) -> SessionRecord:
        async with self._lock:
            records = self._load()
            index = self._index_of(records, session_id)
            stored = replace(record, id=session_id)
            records[index] = stored
            self._dump(records)
        return stored

    async def delete_session(self, session_id: str) -> None:
        async with self._lock:
            records = self._load()
            del records[self._index_of(records, session_id)]
            self._dump(records)

    @staticmethod
    def _index_of(records: list[SessionRecord], session_id: str) -> int:
        for i, record in enumerate(records):
            if record.id == session_id:
                return i
        raise SessionNotFoundError(session_id)

    def _load(self) -> list[SessionRecord]:
        if not self.path.exists():
            return []

        text = self.path.read_text(encoding="utf-8")
        try:
            raw = yaml.safe_load(text) if self.is_yaml else json.loads(text or "[]")
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            logger.error(f"Could not parse logbook {self.path}: {e}")
            raise StoreError(f"Could not parse logbook {self.path}: {e}") from e

        entries = self._entries(raw)
        records = []
        for i, entry in enumerate(entries):
            try:
                records.append(record_from_payload(entry, self._scale))
            except SessionValidationError as e:
                logger.error(f"Invalid session #{i} in {self.path}: {e}")
                raise
        return records

    def _entries(self, raw: Any) -> list[Any]:
        if raw is None:
            return []
        if isinstance(raw, dict):
            raw = raw.get(LOGBOOK_SESSIONS_KEY, [])
        if not isinstance(raw, list):
            raise StoreError(f"Logbook {self.path} must hold a list of sessions")
        return raw

    def _dump(self, records: list[SessionRecord]) -> None:
        data = {LOGBOOK_SESSIONS_KEY: [record_to_payload(r) for r in records]}
        if self.is_yaml:
            text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
        else:
            text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_text(text, encoding="utf-8")
            tmp.replace(self.path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(records)} sessions to {self.path}")
