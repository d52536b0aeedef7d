"""
Completion Worker - Settles queued jobs after a randomized delay
Implements: Single Responsibility Principle (SRP)
"""
import asyncio
import logging
import random
from typing import Callable, Optional

from .base import BaseWorker
from ..services.job_service import JobService

logger = logging.getLogger(__name__)


class CompletionWorker(BaseWorker):
    """
    Worker để hoàn tất jobs

    Each job id taken from the queue gets its own task that sleeps a
    uniform random delay in [min_delay, max_delay] and then runs
    JobService.complete exactly once.
    """

    def __init__(
        self,
        job_service: JobService,
        queue: asyncio.Queue,
        min_delay: float = 2.0,
        max_delay: float = 4.0,
        max_concurrent: int = 1000,
        stop_event: Optional[asyncio.Event] = None,
        rng: Callable[[float, float], float] = random.uniform
    ):
        super().__init__(max_concurrent, stop_event)
        self.job_service = job_service
        self.queue = queue
        self.min_delay = min_delay
        self.max_delay = max_delay
        self.rng = rng

    def get_queue(self) -> asyncio.Queue:
        return self.queue

    def next_delay(self) -> float:
        return self.rng(self.min_delay, self.max_delay)

    async def process_task(self, job_id: str):
        delay = self.next_delay()
        logger.debug(f"[WORKER] Job {job_id} completes in {delay:.2f}s")
        await asyncio.sleep(delay)
        await self.job_service.complete(job_id)
