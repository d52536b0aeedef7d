"""
Payment Worker - Confirms simulated QR payments
"""
import asyncio
import logging
from typing import Optional

from .base import BaseWorker
from ..services.billing_service import BillingService

logger = logging.getLogger(__name__)


class PaymentWorker(BaseWorker):
    """Stands in for the payment gateway webhook: every order is paid after confirm_delay"""

    def __init__(
        self,
        billing_service: BillingService,
        queue: asyncio.Queue,
        confirm_delay: float = 5.0,
        max_concurrent: int = 100,
        stop_event: Optional[asyncio.Event] = None
    ):
        super().__init__(max_concurrent, stop_event)
        self.billing_service = billing_service
        self.queue = queue
        self.confirm_delay = confirm_delay

    def get_queue(self) -> asyncio.Queue:
        return self.queue

    async def process_task(self, order_id: str):
        await asyncio.sleep(self.confirm_delay)
        await self.billing_service.confirm_order(order_id)
