"""
API Session Store — Infrastructure adapter for the remote sessions API.

Implements SessionStore over HTTP. The base URL and token are passed in
explicitly; responses are converted to validated records before they
leave this module.
"""

import logging
from datetime import date
from typing import Any

import httpx

from ascend.application.sessions.payloads import record_from_payload, record_to_payload
from ascend.domain.constants import REQUEST_TIMEOUT, SESSIONS_ENDPOINT
from ascend.domain.errors import SessionNotFoundError, StoreError
from ascend.domain.grades import Discipline, GradeScale
from ascend.domain.sessions.models import SessionRecord
from ascend.domain.sessions.ports import SessionStore


class ApiSessionStore(SessionStore):
    """Adapter for the sessions REST API (``/api/sessions``) with bearer auth."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = REQUEST_TIMEOUT,
        scale: GradeScale | None = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token = token
        self._scale = scale or GradeScale()
        self._client: httpx.AsyncClient | None = None
        self.logger.debug(f"ApiSessionStore initialized with base_url={self.base_url}")

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _request(
        self, method: str, path: str, session_id: str | None = None, **kwargs: Any
    ) -> httpx.Response:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, headers=self._headers()
            )

        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            self.logger.error(f"Sessions API call failed: {method} {path}: {e}")
            raise StoreError(f"Sessions API unreachable: {e}") from e

        if resp.status_code == 404 and session_id is not None:
            raise SessionNotFoundError(session_id)
        if resp.status_code >= 400:
            self.logger.error(
                f"Sessions API error: {method} {path} -> {resp.status_code} {resp.text}"
            )
            raise StoreError(f"{method} {path} failed: {resp.status_code} - {resp.text}")
        return resp

    def _to_record(self, data: Any) -> SessionRecord:
        return record_from_payload(data, self._scale)

    async def list_sessions(
        self, discipline: Discipline | None = None, on: date | None = None
    ) -> list[SessionRecord]:
        params = {}
        if discipline is not None:
            params["discipline"] = discipline.value
        if on is not None:
            params["date"] = on.isoformat()

        resp = await self._request("GET", SESSIONS_ENDPOINT, params=params)
        data = resp.json()
        if not isinstance(data, list):
            raise StoreError(f"Expected a list of sessions, got {type(data).__name__}")
        return [self._to_record(item) for item in data]

    async def get_session(self, session_id: str) -> SessionRecord:
        resp = await self._request(
            "GET", f"{SESSIONS_ENDPOINT}/{session_id}", session_id=session_id
        )
        return self._to_record(resp.json())

    async def create_session(self, record: SessionRecord) -> SessionRecord:
        resp = await self._request(
            "POST", SESSIONS_ENDPOINT, json=record_to_payload(record, include_id=False)
        )
        return self._to_record(resp.json())

    async def replace_session(self, session_id: str, record: SessionRecord) -> SessionRecord:
        resp = await self._request(
            "PUT",
            f"{SESSIONS_ENDPOINT}/{session_id}",
            session_id=session_id,
            json=record_to_payload(record, include_id=False),
        )
        return self._to_record(resp.json())

    async def delete_session(self, session_id: str) -> None:
        await self._request("DELETE", f"{SESSIONS_ENDPOINT}/{session_id}", session_id=session_id)

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
