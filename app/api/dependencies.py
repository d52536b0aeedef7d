"""
FastAPI Dependencies

Provides dependency injection for FastAPI endpoints.
Services come from the global container; tests override either the
container providers or these functions via app.dependency_overrides.

Usage in endpoints:
    @router.get("/jobs/{job_id}")
    async def get_job(
        job_id: str,
        claims: SessionClaims = Depends(get_current_claims),
        service: JobService = Depends(get_job_service)
    ):
        ...
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.container import container
from ..core.domain.session import SessionClaims
from ..core.repositories.job_repo import JobRepository
from ..core.services.auth_service import AuthService
from ..core.services.billing_service import BillingService
from ..core.services.job_service import JobService
from ..core.services.user_service import UserService
from ..core.workers.manager import WorkerManager

bearer_scheme = HTTPBearer(auto_error=False)


# ========== Repositories ==========
def get_job_repository() -> JobRepository:
    return container.job_repository()


# ========== Services ==========
def get_auth_service() -> AuthService:
    return container.auth_service()


def get_user_service() -> UserService:
    return container.user_service()


def get_job_service() -> JobService:
    return container.job_service()


def get_billing_service() -> BillingService:
    return container.billing_service()


def get_worker_manager() -> WorkerManager:
    return container.worker_manager()


# ========== Session ==========
def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service)
) -> SessionClaims:
    """
    Resolve the caller from the bearer token

    Raises:
        InvalidSessionError: Missing, non-bearer, invalid or expired token (401)
    """
    token = credentials.credentials if credentials else None
    return auth.authorize(token)


def require_admin(
    claims: SessionClaims = Depends(get_current_claims),
    auth: AuthService = Depends(get_auth_service)
) -> SessionClaims:
    """
    Resolve the caller and insist on admin rights

    Raises:
        InvalidSessionError: As get_current_claims (401)
        AuthorizationError: Caller is not an admin (403)
    """
    return auth.require_admin(claims)
