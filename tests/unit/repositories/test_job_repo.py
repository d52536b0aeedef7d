"""
Unit tests for JobRepository
"""
from datetime import timedelta

import pytest

from app.core.domain.job import Job, JobId, JobSpec, JobStatus, utcnow
from app.core.repositories.job_repo import JobRepository


@pytest.fixture
def repo():
    return JobRepository()


def make_job(owner_id: str = "u1") -> Job:
    return Job(id=JobId.new(), owner_id=owner_id, spec=JobSpec(text="Hello", voice_id="vi-VN-Standard-A"))


class TestJobRepositoryCrud:

    @pytest.mark.asyncio
    async def test_create_and_get(self, repo):
        job = await repo.create(make_job())
        assert await repo.get_by_id(job.id.value) is job
        assert await repo.count() == 1

    @pytest.mark.asyncio
    async def test_duplicate_id_rejected(self, repo):
        job = make_job()
        await repo.create(job)
        with pytest.raises(ValueError, match="already exists"):
            await repo.create(job)

    @pytest.mark.asyncio
    async def test_get_unknown_returns_none(self, repo):
        assert await repo.get_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_update_unknown_fails(self, repo):
        with pytest.raises(ValueError, match="not found"):
            await repo.update(make_job())

    @pytest.mark.asyncio
    async def test_delete(self, repo):
        job = await repo.create(make_job())
        assert await repo.delete(job.id.value) is True
        assert await repo.delete(job.id.value) is False


class TestJobRepositoryQueries:

    @pytest.mark.asyncio
    async def test_get_by_owner_newest_first(self, repo):
        first = make_job("u1")
        second = make_job("u1")
        second.created_at = first.created_at + timedelta(seconds=1)
        await repo.create(first)
        await repo.create(second)
        await repo.create(make_job("u2"))

        jobs = await repo.get_by_owner("u1")
        assert [j.id for j in jobs] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_active_and_status_queries(self, repo):
        queued = await repo.create(make_job())
        done = await repo.create(make_job())
        done.mark_completed("ref")

        assert await repo.get_active_jobs() == [queued]
        assert await repo.get_by_status([JobStatus.COMPLETED]) == [done]
        counts = await repo.count_by_status()
        assert counts == {"queued": 1, "processing": 0, "completed": 1, "failed": 0}

    @pytest.mark.asyncio
    async def test_mutate_applies_under_lock(self, repo):
        job = await repo.create(make_job())
        result = repo.mutate(job.id.value, lambda j: j.mark_processing())
        assert result.status == JobStatus.PROCESSING
        assert repo.mutate("missing", lambda j: j.mark_processing()) is None


class TestJobRepositoryEviction:

    @pytest.mark.asyncio
    async def test_evicts_only_old_terminal_jobs(self, repo):
        old = await repo.create(make_job())
        old.mark_failed("boom")
        old.finished_at = utcnow() - timedelta(hours=2)

        recent = await repo.create(make_job())
        recent.mark_completed("ref")

        active = await repo.create(make_job())

        removed = await repo.evict_terminal_before(utcnow() - timedelta(hours=1))

        assert removed == 1
        assert await repo.get_by_id(old.id.value) is None
        assert await repo.get_by_id(recent.id.value) is recent
        assert await repo.get_by_id(active.id.value) is active
