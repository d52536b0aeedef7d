"""
Base Worker Class
Implements: Single Responsibility Principle (SRP)

A worker drains an asyncio.Queue of ids. Every id gets its own task, and a
semaphore caps how many of those run at once.
"""
from abc import ABC, abstractmethod
import asyncio
import logging
from typing import Optional, Set

logger = logging.getLogger(__name__)


class BaseWorker(ABC):
    """Abstract base class cho workers xử lý ids từ một queue"""

    def __init__(
        self,
        max_concurrent: int = 10,
        stop_event: Optional[asyncio.Event] = None
    ):
        self.max_concurrent = max_concurrent
        self.stop_event = stop_event or asyncio.Event()
        self._running = False
        self._pending: Set[asyncio.Task] = set()
        self._slots: Optional[asyncio.Semaphore] = None

    @abstractmethod
    async def process_task(self, item: str):
        """Handle one id taken from the queue"""

    @abstractmethod
    def get_queue(self) -> asyncio.Queue:
        """Queue this worker drains"""

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def active_count(self) -> int:
        return len(self._pending)

    @property
    def name(self) -> str:
        return self.__class__.__name__

    async def start(self):
        """Drain the queue until the stop event is set"""
        if self._running:
            logger.warning(f"{self.name} already running")
            return

        self._running = True
        self.stop_event.clear()
        self._slots = asyncio.Semaphore(self.max_concurrent)
        logger.info(f"[START] {self.name} started (max_concurrent={self.max_concurrent})")

        stopped = asyncio.create_task(self.stop_event.wait())
        try:
            await self._drain(self.get_queue(), stopped)
        except Exception as e:
            logger.error(f"[ERROR] {self.name} crashed: {e}", exc_info=True)
            raise
        finally:
            stopped.cancel()
            self._running = False

    async def stop(self):
        """Set the stop event and cancel every scheduled task"""
        logger.info(f"[STOP] {self.name} stopping...")
        self.stop_event.set()

        pending = list(self._pending)
        if pending:
            logger.info(f"[STOP] Cancelling {len(pending)} scheduled tasks...")
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        logger.info(f"[STOP] {self.name} stopped")

    async def _drain(self, queue: asyncio.Queue, stopped: asyncio.Task):
        while not self.stop_event.is_set():
            # Hold a slot before taking an id so the queue keeps the backlog
            await self._slots.acquire()
            item = await self._next_item(queue, stopped)
            if item is None:
                self._slots.release()
                return
            self._schedule(item)

    async def _next_item(self, queue: asyncio.Queue, stopped: asyncio.Task) -> Optional[str]:
        getter = asyncio.create_task(queue.get())
        try:
            await asyncio.wait({getter, stopped}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            if not getter.done():
                getter.cancel()
        if self.stop_event.is_set():
            return None
        return getter.result()

    def _schedule(self, item: str):
        task = asyncio.create_task(self.process_task(item), name=f"{self.name}:{item}")
        self._pending.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task):
        self._pending.discard(task)
        self._slots.release()
        if not task.cancelled() and task.exception() is not None:
            exc = task.exception()
            logger.error(f"[ERROR] {task.get_name()} failed: {exc}", exc_info=exc)
