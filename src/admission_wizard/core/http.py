"""
Backend HTTP Client

Thin async wrapper around ``requests`` for the admissions REST backend.

One ``ApiClient`` is created per user session and passed explicitly to the
components that need it; it owns the base URL, the bearer token and the
``requests.Session`` objects, one per worker thread since a session must not
be shared across threads.
"""

import asyncio
import logging
import threading
from collections.abc import Callable
from typing import Any

import requests

from admission_wizard.core.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when a backend call fails (HTTP error status or transport error)."""

    def __init__(self, message: str, status_code: int | None = None, payload: Any = None):
        self.message = message
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)


def extract_error_message(payload: Any, default: str) -> str:
    """
    Pull a human readable message out of a backend error body.

    The backend is not consistent; it may answer
    ``{"error": {"message": ...}}``, ``{"data": {"message": ...}}`` or
    ``{"message": ...}``.
    """
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        if isinstance(error, str) and error:
            return error
        data = payload.get("data")
        if isinstance(data, dict) and data.get("message"):
            return data["message"]
        if payload.get("message"):
            return payload["message"]
    if isinstance(payload, str) and payload.strip():
        return payload.strip()
    return default


class ApiClient:
    """Session-scoped client for the admissions backend."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout or settings.request_timeout_seconds
        self.session_factory = session_factory
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._lock = threading.Lock()
        self.token = token

    def set_token(self, token: str | None) -> None:
        """Attach (or drop) the bearer token for subsequent requests."""
        self.token = token

    def close(self) -> None:
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
        self._local = threading.local()

    def _session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = self.session_factory()
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._url(path)
        try:
            response = self._session().request(
                method,
                url,
                headers=self._headers(),
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(f"Error de conexión con el servidor: {e}") from e

        try:
            body = response.json() if response.content else None
        except ValueError:
            body = response.text

        if not response.ok:
            message = extract_error_message(body, f"HTTP {response.status_code}")
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code, payload=body)

        return body

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        # requests is blocking; run it off the event loop
        return await asyncio.to_thread(self._request, method, path, **kwargs)

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("POST", path, json=json, **kwargs)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
