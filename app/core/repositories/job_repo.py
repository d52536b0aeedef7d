"""
Job Repository

In-memory store for the Job aggregate, keyed by job id.
"""

from typing import List
from datetime import datetime
from .base import BaseRepository
from ..domain.job import Job, JobStatus


class JobRepository(BaseRepository[Job]):
    """
    Repository cho Job aggregate

    Handles:
    - CRUD operations
    - Owner and status queries
    - Eviction of old terminal jobs
    """

    def key_of(self, entity: Job) -> str:
        return entity.id.value

    async def get_by_owner(self, owner_id: str) -> List[Job]:
        """
        Jobs owned by one subject, newest first
        """
        jobs = self._filter(lambda job: job.owner_id == owner_id)
        return sorted(jobs, key=lambda job: job.created_at, reverse=True)

    async def get_by_status(self, statuses: List[JobStatus]) -> List[Job]:
        wanted = set(statuses)
        return self._filter(lambda job: job.status in wanted)

    async def get_active_jobs(self) -> List[Job]:
        return self._filter(lambda job: job.status.is_active())

    async def evict_terminal_before(self, cutoff: datetime) -> int:
        """
        Drop terminal jobs that finished before cutoff

        Args:
            cutoff: Jobs finished strictly before this instant are removed

        Returns:
            Number of jobs removed
        """
        with self._lock:
            stale = [
                key for key, job in self._items.items()
                if job.status.is_terminal()
                and job.finished_at is not None
                and job.finished_at < cutoff
            ]
            for key in stale:
                del self._items[key]
        return len(stale)

    async def count_by_status(self) -> dict:
        with self._lock:
            counts = {status.value: 0 for status in JobStatus}
            for job in self._items.values():
                counts[job.status.value] += 1
        return counts
