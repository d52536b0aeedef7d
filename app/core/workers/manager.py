"""
Worker Manager - Orchestrate background workers
"""
import asyncio
import logging
from typing import List

from .completion_worker import CompletionWorker
from .payment_worker import PaymentWorker
from .sweep_worker import SweepWorker
from ..repositories.job_repo import JobRepository
from ..services.billing_service import BillingService
from ..services.job_service import JobService
from ...config import Settings

logger = logging.getLogger(__name__)


class WorkerManager:
    """Manager để start/stop tất cả workers"""

    def __init__(
        self,
        settings: Settings,
        job_service: JobService,
        billing_service: BillingService,
        job_repo: JobRepository
    ):
        self.stop_event = asyncio.Event()

        self.completion_worker = CompletionWorker(
            job_service=job_service,
            queue=job_service.completion_queue,
            min_delay=settings.job_min_delay_seconds,
            max_delay=settings.job_max_delay_seconds,
            stop_event=self.stop_event
        )

        self.payment_worker = PaymentWorker(
            billing_service=billing_service,
            queue=billing_service.payment_queue,
            confirm_delay=settings.payment_confirm_seconds,
            stop_event=self.stop_event
        )

        self.sweep_worker = SweepWorker(
            job_repo=job_repo,
            retention_seconds=settings.job_retention_seconds,
            interval_seconds=settings.job_sweep_interval_seconds,
            stop_event=self.stop_event
        )

        self._tasks: List[asyncio.Task] = []

    @property
    def is_running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    async def start_all(self):
        """Start all workers"""
        if self.is_running:
            logger.warning("[WORKER MANAGER] Workers already running")
            return

        logger.info("[WORKER MANAGER] Starting all workers...")
        self.stop_event.clear()

        self._tasks = [
            asyncio.create_task(self.completion_worker.start(), name="completion_worker"),
            asyncio.create_task(self.payment_worker.start(), name="payment_worker"),
            asyncio.create_task(self.sweep_worker.start(), name="sweep_worker")
        ]

        logger.info("[WORKER MANAGER] All workers started")

    async def stop_all(self):
        """Stop all workers, cancelling pending completions"""
        logger.info("[WORKER MANAGER] Stopping all workers...")

        self.stop_event.set()

        await asyncio.gather(
            self.completion_worker.stop(),
            self.payment_worker.stop(),
            self.sweep_worker.stop(),
            return_exceptions=True
        )

        for task in self._tasks:
            if not task.done():
                task.cancel()

        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()

        logger.info("[WORKER MANAGER] All workers stopped")

    def get_status(self) -> dict:
        return {
            "running": self.is_running,
            "pending_completions": self.completion_worker.active_count,
            "pending_payments": self.payment_worker.active_count,
        }
