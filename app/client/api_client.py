"""
Voice Studio API client (aiohttp)

Thin async wrapper over the HTTP API. Error responses are raised as the
same exception types the server uses, so callers can tell "fix your
input" from "please sign in" from "not allowed".
"""
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    InsufficientCreditsError,
    InternalError,
    InvalidSessionError,
    NotFoundError,
    ValidationError,
    VoiceStudioError,
)
from .poller import JobPoller, JobStatusView
from .session_store import SessionStore

logger = logging.getLogger(__name__)


def error_for_response(status: int, body: Any) -> VoiceStudioError:
    detail = "Request failed"
    code = ""
    if isinstance(body, dict):
        raw = body.get("detail")
        detail = raw if isinstance(raw, str) else (str(raw) if raw else detail)
        code = body.get("code") or ""

    if status == 400:
        return ValidationError(detail)
    if status == 402:
        return InsufficientCreditsError(detail)
    if status == 401:
        if code == "authentication_failed":
            return AuthenticationError(detail)
        return InvalidSessionError(detail)
    if status == 403:
        return AuthorizationError(detail)
    if status == 404:
        return NotFoundError(detail)
    return InternalError(f"HTTP {status}: {detail}")


class VoiceStudioClient:
    """
    Usage:
        async with VoiceStudioClient("http://localhost:3001") as client:
            await client.login(google_credential)
            result = await client.convert("Xin chào", "vi-VN-Standard-A")
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        session_store: Optional[SessionStore] = None,
        poll_interval: float = 3.0,
        timeout: float = 30.0
    ):
        self.base_url = base_url.rstrip("/")
        self.session_store = session_store
        self.poll_interval = poll_interval
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.token = token
        if self.token is None and session_store is not None:
            stored = session_store.load()
            self.token = stored.token if stored else None
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "VoiceStudioClient":
        self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    def _headers(self, auth: bool) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if auth and self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(self, method: str, path: str, json: Any = None, auth: bool = True) -> Any:
        if self._session is None:
            raise RuntimeError("Client session not open, use 'async with VoiceStudioClient(...)'")

        url = f"{self.base_url}/api{path}"
        async with self._session.request(method, url, json=json, headers=self._headers(auth)) as resp:
            body = None
            if resp.status != 204:
                try:
                    body = await resp.json(content_type=None)
                except ValueError:
                    body = None

            if resp.status >= 400:
                error = error_for_response(resp.status, body)
                if isinstance(error, InvalidSessionError):
                    self.logout()
                raise error
            return body

    # ========== Session ==========
    async def login(self, credential: str) -> Dict[str, Any]:
        data = await self._request("POST", "/auth/session", json={"credential": credential}, auth=False)
        self.token = data["token"]
        if self.session_store is not None:
            self.session_store.save(self.token)
        return data

    def logout(self) -> None:
        self.token = None
        if self.session_store is not None:
            self.session_store.clear()

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/session/me")

    # ========== Jobs ==========
    async def submit(self, text: str, voice_id: str) -> str:
        data = await self._request("POST", "/jobs", json={"text": text, "voiceId": voice_id})
        logger.info(f"[CLIENT] Job queued: {data['id']}")
        return data["id"]

    async def get_status(self, job_id: str) -> JobStatusView:
        data = await self._request("GET", f"/jobs/{job_id}")
        return JobStatusView.from_json(data)

    async def convert(self, text: str, voice_id: str, max_polls: Optional[int] = None) -> Optional[JobStatusView]:
        """Submit and poll until the job finishes"""
        job_id = await self.submit(text, voice_id)
        async with JobPoller(self.get_status, interval=self.poll_interval, max_polls=max_polls) as poller:
            poller.start(job_id)
            return await poller.wait()

    # ========== Catalog / admin ==========
    async def list_voices(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/voices", auth=False)

    async def list_users(self) -> List[Dict[str, Any]]:
        data = await self._request("GET", "/admin/users")
        return data.get("items", [])
