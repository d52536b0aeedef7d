"""
Dependency Injection Container

Implements Dependency Inversion Principle (DIP):
- Central place to configure dependencies
- Easy to swap implementations
- Easy to test (can override providers)

Uses dependency-injector library for IoC container
"""

import asyncio

from dependency_injector import containers, providers

from ..config import Settings

# Repositories
from .repositories.job_repo import JobRepository
from .repositories.user_repo import UserRepository
from .repositories.file_repo import FileRepository
from .repositories.billing_repo import (
    DiscountCodeRepository,
    OrderRepository,
    PlanRepository,
    TransactionRepository,
)

# Services
from .services.auth_service import AuthService, GoogleIdentityVerifier
from .services.billing_service import BillingService
from .services.job_service import JobService
from .services.synthesizer import SampleSynthesizer
from .services.user_service import UserService

# Workers
from .workers.manager import WorkerManager


class Container(containers.DeclarativeContainer):
    """
    Main DI Container

    All state is process-local, so repositories, queues and services
    are singletons shared by every request.
    """

    # ========== Configuration ==========
    settings = providers.Singleton(Settings.from_env)

    # ========== Repositories ==========
    job_repository = providers.Singleton(JobRepository)
    user_repository = providers.Singleton(UserRepository)
    file_repository = providers.Singleton(FileRepository)
    plan_repository = providers.Singleton(PlanRepository)
    discount_code_repository = providers.Singleton(DiscountCodeRepository)
    order_repository = providers.Singleton(OrderRepository)
    transaction_repository = providers.Singleton(TransactionRepository)

    # ========== Queues ==========
    completion_queue = providers.Singleton(asyncio.Queue)
    payment_queue = providers.Singleton(asyncio.Queue)

    # ========== Integrations ==========
    identity_verifier = providers.Singleton(
        GoogleIdentityVerifier,
        client_id=settings.provided.google_client_id
    )

    synthesizer = providers.Singleton(
        SampleSynthesizer,
        failure_marker=settings.provided.job_failure_marker
    )

    # ========== Services ==========
    user_service = providers.Singleton(
        UserService,
        user_repo=user_repository,
        settings=settings
    )

    auth_service = providers.Singleton(
        AuthService,
        settings=settings,
        verifier=identity_verifier,
        user_service=user_service
    )

    job_service = providers.Singleton(
        JobService,
        job_repo=job_repository,
        synthesizer=synthesizer,
        completion_queue=completion_queue,
        credit_ledger=user_service,
        file_repo=file_repository
    )

    billing_service = providers.Singleton(
        BillingService,
        plan_repo=plan_repository,
        code_repo=discount_code_repository,
        order_repo=order_repository,
        txn_repo=transaction_repository,
        user_service=user_service,
        payment_queue=payment_queue
    )

    # ========== Workers ==========
    worker_manager = providers.Singleton(
        WorkerManager,
        settings=settings,
        job_service=job_service,
        billing_service=billing_service,
        job_repo=job_repository
    )


# Global container instance
container = Container()


def reset_container():
    """
    Drop all singletons and overrides

    Useful for testing
    """
    container.reset_override()
    container.reset_singletons()
