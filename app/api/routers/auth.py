"""
Auth Router
Implements: Single Responsibility Principle (SRP)

This router handles session endpoints:
- Exchange a Google credential for a session token
- Inspect the current session
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import AliasChoices, BaseModel, Field

from ...core.domain.session import SessionClaims
from ...core.services.auth_service import AuthService
from ...schemas import UserResponse
from ..dependencies import get_auth_service, get_current_claims

import logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ========== Schemas ==========
class SessionRequest(BaseModel):
    """Google ID token; older clients send it as idToken"""
    credential: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("credential", "idToken")
    )


class SessionClaimsResponse(BaseModel):
    subject: str
    name: str
    picture: Optional[str] = None
    is_admin: bool
    issued_at: int
    expires_at: int

    @staticmethod
    def from_domain(claims: SessionClaims) -> "SessionClaimsResponse":
        return SessionClaimsResponse(
            subject=claims.subject,
            name=claims.name,
            picture=claims.picture,
            is_admin=claims.is_admin,
            issued_at=claims.issued_at,
            expires_at=claims.expires_at
        )


class SessionResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse


# ========== Endpoints ==========
@router.post("/auth/session", response_model=SessionResponse)
async def create_session(
    data: SessionRequest,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Sign in with a Google credential

    Raises:
        400: Credential missing
        401: Credential failed verification
    """
    result = await auth.authenticate(data.credential)
    return SessionResponse(
        token=result.token,
        expires_at=result.claims.expires_at_datetime,
        user=UserResponse.from_domain(result.user)
    )


@router.get("/session/me", response_model=SessionClaimsResponse)
async def get_session(claims: SessionClaims = Depends(get_current_claims)):
    """Decoded claims of the caller's session token"""
    return SessionClaimsResponse.from_domain(claims)
