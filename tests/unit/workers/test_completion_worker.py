"""
Unit tests for CompletionWorker and WorkerManager
"""
import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from app.core.repositories.job_repo import JobRepository
from app.core.services.billing_service import BillingService
from app.core.services.job_service import JobService
from app.core.workers.completion_worker import CompletionWorker
from app.core.workers.manager import WorkerManager


@pytest.fixture
def mock_job_service():
    service = Mock(spec=JobService)
    service.complete = AsyncMock()
    service.completion_queue = asyncio.Queue()
    return service


class TestCompletionWorker:

    def test_delay_drawn_from_configured_range(self, mock_job_service):
        rng = Mock(return_value=3.1)
        worker = CompletionWorker(mock_job_service, asyncio.Queue(), min_delay=2.0, max_delay=4.0, rng=rng)

        assert worker.next_delay() == 3.1
        rng.assert_called_once_with(2.0, 4.0)

    def test_default_delay_within_bounds(self, mock_job_service):
        worker = CompletionWorker(mock_job_service, asyncio.Queue())
        delays = [worker.next_delay() for _ in range(200)]
        assert all(2.0 <= d <= 4.0 for d in delays)

    @pytest.mark.asyncio
    async def test_completes_each_queued_job_once(self, mock_job_service, wait_until):
        queue = asyncio.Queue()
        worker = CompletionWorker(mock_job_service, queue, rng=lambda a, b: 0.0)
        runner = asyncio.create_task(worker.start())

        queue.put_nowait("job-1")
        queue.put_nowait("job-2")
        await wait_until(lambda: mock_job_service.complete.await_count == 2)

        await worker.stop()
        await asyncio.wait_for(runner, timeout=3)

        awaited = sorted(call.args[0] for call in mock_job_service.complete.await_args_list)
        assert awaited == ["job-1", "job-2"]

    @pytest.mark.asyncio
    async def test_stop_cancels_pending_completions(self, mock_job_service, wait_until):
        queue = asyncio.Queue()
        worker = CompletionWorker(mock_job_service, queue, rng=lambda a, b: 60.0)
        runner = asyncio.create_task(worker.start())

        queue.put_nowait("slow-job")
        await wait_until(lambda: worker.active_count == 1)

        await worker.stop()
        await asyncio.wait_for(runner, timeout=3)

        assert worker.active_count == 0
        assert not worker.is_running
        mock_job_service.complete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_max_concurrent_leaves_backlog_in_queue(self, mock_job_service, wait_until):
        queue = asyncio.Queue()
        worker = CompletionWorker(mock_job_service, queue, max_concurrent=1, rng=lambda a, b: 60.0)
        runner = asyncio.create_task(worker.start())

        queue.put_nowait("first")
        queue.put_nowait("second")
        await wait_until(lambda: worker.active_count == 1)
        await asyncio.sleep(0.05)

        assert worker.active_count == 1
        assert queue.qsize() == 1

        await worker.stop()
        await asyncio.wait_for(runner, timeout=3)
        assert worker.active_count == 0

    @pytest.mark.asyncio
    async def test_failed_completion_does_not_stop_worker(self, mock_job_service, wait_until):
        mock_job_service.complete.side_effect = [RuntimeError("boom"), None]
        queue = asyncio.Queue()
        worker = CompletionWorker(mock_job_service, queue, rng=lambda a, b: 0.0)
        runner = asyncio.create_task(worker.start())

        queue.put_nowait("bad")
        await wait_until(lambda: mock_job_service.complete.await_count == 1)
        queue.put_nowait("good")
        await wait_until(lambda: mock_job_service.complete.await_count == 2)

        assert worker.is_running
        await worker.stop()
        await asyncio.wait_for(runner, timeout=3)


class TestWorkerManager:

    @pytest.mark.asyncio
    async def test_start_and_stop_all(self, mock_job_service, test_settings):
        billing = Mock(spec=BillingService)
        billing.payment_queue = asyncio.Queue()
        manager = WorkerManager(test_settings, mock_job_service, billing, JobRepository())

        await manager.start_all()
        await asyncio.sleep(0)
        assert manager.is_running
        assert manager.get_status()["running"] is True

        await manager.stop_all()
        assert not manager.is_running
        assert manager.get_status() == {"running": False, "pending_completions": 0, "pending_payments": 0}
