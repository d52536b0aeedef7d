"""
Job Poller - client-side status polling

Polls GET /jobs/{id} on a fixed interval until the job reaches a terminal
status. Only one status call is ever in flight. cancel() is synchronous:
once it returns no further status call is made, so a view can call it on
teardown without leaking a timer.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

import aiohttp

from ..core.exceptions import VoiceStudioError

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = ("completed", "failed")
TRANSPORT_ERROR = "Could not reach the server while checking the job"
POLL_LIMIT_ERROR = "Gave up waiting for the job to finish"


@dataclass(frozen=True)
class JobStatusView:
    id: str
    status: str
    result_reference: Optional[str] = None
    error: Optional[str] = None
    # Set when the server refused the status call itself
    error_code: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def succeeded(self) -> bool:
        return self.status == "completed"

    @staticmethod
    def from_json(data: dict) -> "JobStatusView":
        return JobStatusView(
            id=str(data.get("id", "")),
            status=str(data.get("status", "")),
            result_reference=data.get("result_reference"),
            error=data.get("error"),
        )


StatusFetcher = Callable[[str], Awaitable[JobStatusView]]


class JobPoller:
    """
    Usage:
        async with JobPoller(client.get_status) as poller:
            poller.start(job_id)
            result = await poller.wait()
    """

    def __init__(
        self,
        fetch_status: StatusFetcher,
        interval: float = 3.0,
        max_polls: Optional[int] = None,
        on_update: Optional[Callable[[JobStatusView], None]] = None
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.fetch_status = fetch_status
        self.interval = interval
        self.max_polls = max_polls
        self.on_update = on_update
        self.poll_count = 0
        self._cancelled = False
        self._task: Optional[asyncio.Task] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, job_id: str) -> asyncio.Task:
        if self._task is not None:
            raise RuntimeError("Poller already started, create a new one for another job")
        if self._cancelled:
            raise RuntimeError("Poller was cancelled")
        self._task = asyncio.create_task(self._run(job_id), name=f"poll_{job_id}")
        return self._task

    def cancel(self) -> None:
        """Stop polling; no status call happens after this returns"""
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self) -> Optional[JobStatusView]:
        """
        Wait for the outcome

        Returns:
            Terminal status, or None if polling was cancelled
        """
        if self._task is None:
            raise RuntimeError("Poller not started")
        try:
            return await self._task
        except asyncio.CancelledError:
            if self._cancelled and self._task.cancelled():
                return None
            raise

    async def _run(self, job_id: str) -> Optional[JobStatusView]:
        while True:
            await asyncio.sleep(self.interval)
            if self._cancelled:
                return None

            try:
                status = await self.fetch_status(job_id)
            except VoiceStudioError as e:
                logger.warning(f"[POLL] Server refused status check for job {job_id}: {e.code}")
                return JobStatusView(id=job_id, status="failed", error=e.message, error_code=e.code)
            except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
                logger.warning(f"[POLL] Status check for job {job_id} failed: {e}")
                return JobStatusView(id=job_id, status="failed", error=TRANSPORT_ERROR)

            self.poll_count += 1
            if self.on_update is not None:
                self.on_update(status)

            if status.is_terminal:
                logger.info(f"[POLL] Job {job_id} finished: {status.status}")
                return status

            if self.max_polls is not None and self.poll_count >= self.max_polls:
                logger.warning(f"[POLL] Job {job_id} still {status.status} after {self.poll_count} polls")
                return JobStatusView(id=job_id, status="failed", error=POLL_LIMIT_ERROR)

    async def __aenter__(self) -> "JobPoller":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.cancel()
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)
