"""
Workers Package

Background tasks running on the server's event loop:
- CompletionWorker: settles queued jobs after a randomized delay
- PaymentWorker: confirms simulated top-up orders
- SweepWorker: evicts old finished jobs
"""

from .base import BaseWorker
from .completion_worker import CompletionWorker
from .payment_worker import PaymentWorker
from .sweep_worker import SweepWorker
from .manager import WorkerManager

__all__ = [
    'BaseWorker',
    'CompletionWorker',
    'PaymentWorker',
    'SweepWorker',
    'WorkerManager',
]
