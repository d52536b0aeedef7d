"""
Domain Models Package

This package contains domain models (value objects and aggregates)
that represent core business entities, independent of infrastructure.
"""

from .job import (
    JobId,
    JobStatus,
    JobSpec,
    Job
)

from .session import SessionClaims
from .user import User
from .voice import Voice, find_voice, list_voices

from .billing import (
    PricingPlan,
    DiscountCode,
    DiscountStatus,
    TopUpOrder,
    OrderStatus,
    Transaction
)

from .history import GeneratedFile

__all__ = [
    # Job
    "JobId",
    "JobStatus",
    "JobSpec",
    "Job",

    # Identity
    "SessionClaims",
    "User",

    # Catalog
    "Voice",
    "find_voice",
    "list_voices",

    # Billing
    "PricingPlan",
    "DiscountCode",
    "DiscountStatus",
    "TopUpOrder",
    "OrderStatus",
    "Transaction",

    # History
    "GeneratedFile"
]
