"""
Sweep Worker - Evicts old terminal jobs

Without it the in-memory job store grows for the life of the process.
"""
import asyncio
import logging
from datetime import timedelta
from typing import Optional

from ..domain.job import utcnow
from ..repositories.job_repo import JobRepository

logger = logging.getLogger(__name__)


class SweepWorker:
    """Periodically drops terminal jobs older than the retention window"""

    def __init__(
        self,
        job_repo: JobRepository,
        retention_seconds: float = 3600.0,
        interval_seconds: float = 60.0,
        stop_event: Optional[asyncio.Event] = None
    ):
        self.job_repo = job_repo
        self.retention = timedelta(seconds=retention_seconds)
        self.interval_seconds = interval_seconds
        self.stop_event = stop_event or asyncio.Event()
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def sweep_once(self) -> int:
        removed = await self.job_repo.evict_terminal_before(utcnow() - self.retention)
        if removed:
            logger.info(f"[SWEEP] Evicted {removed} finished jobs")
        return removed

    async def start(self):
        if self._running:
            logger.warning("SweepWorker already running")
            return

        self._running = True
        self.stop_event.clear()
        logger.info(f"[START] SweepWorker started (interval={self.interval_seconds}s)")

        try:
            while not self.stop_event.is_set():
                try:
                    await asyncio.wait_for(self.stop_event.wait(), timeout=self.interval_seconds)
                except asyncio.TimeoutError:
                    pass
                if self.stop_event.is_set():
                    break
                try:
                    await self.sweep_once()
                except Exception as e:
                    logger.error(f"[ERROR] Sweep failed: {e}", exc_info=True)
        finally:
            self._running = False

    async def stop(self):
        self.stop_event.set()
        logger.info("[STOP] SweepWorker stopped")
