"""
Repository Pattern Implementation

High-level code (services, workers) depend on repository abstractions.
All repositories keep their data in process memory.
"""

from .base import BaseRepository
from .job_repo import JobRepository
from .user_repo import UserRepository
from .file_repo import FileRepository
from .billing_repo import (
    PlanRepository,
    DiscountCodeRepository,
    OrderRepository,
    TransactionRepository
)

__all__ = [
    "BaseRepository",
    "JobRepository",
    "UserRepository",
    "FileRepository",
    "PlanRepository",
    "DiscountCodeRepository",
    "OrderRepository",
    "TransactionRepository"
]
