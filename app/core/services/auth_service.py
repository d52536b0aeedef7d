"""
Auth Service - Session issuance and verification
Implements: Single Responsibility Principle (SRP)

Flow:
1. Browser signs in with Google and receives an ID token (credential)
2. authenticate() verifies that credential against Google's keys and
   exchanges it for a signed session token
3. Every protected request runs authorize() on the bearer token
4. Admin-only requests run require_admin() afterwards
"""
import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import jwt

from ...config import Settings
from ..domain.session import SessionClaims
from ..domain.user import User
from ..exceptions import (
    AuthenticationError,
    AuthorizationError,
    InvalidSessionError,
    ValidationError,
)
from .user_service import UserService

logger = logging.getLogger(__name__)

GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v3/certs"
GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")

SESSION_ALGORITHM = "HS256"
SESSION_ISSUER = "ai-voice-studio"


class IdentityVerifier(ABC):
    """Verifies a third-party identity credential"""

    @abstractmethod
    def verify(self, credential: str) -> Dict[str, Any]:
        """
        Verify credential and return its claims

        Raises:
            AuthenticationError: If the credential is not authentic
        """
        pass


class GoogleIdentityVerifier(IdentityVerifier):
    """
    Verify Google Sign-In ID tokens

    Checks the RS256 signature against Google's published keys, the
    audience (our OAuth client id), the issuer, expiry and that the
    email address is verified.
    """

    def __init__(self, client_id: str, jwk_client: Optional[jwt.PyJWKClient] = None):
        self.client_id = client_id
        self._jwk_client = jwk_client

    @property
    def jwk_client(self) -> jwt.PyJWKClient:
        if self._jwk_client is None:
            self._jwk_client = jwt.PyJWKClient(GOOGLE_CERTS_URL, cache_keys=True)
        return self._jwk_client

    def verify(self, credential: str) -> Dict[str, Any]:
        if not self.client_id:
            raise AuthenticationError("Google sign-in is not configured on this server")

        try:
            signing_key = self.jwk_client.get_signing_key_from_jwt(credential)
            claims = jwt.decode(
                credential,
                signing_key.key,
                algorithms=["RS256"],
                audience=self.client_id,
                options={"require": ["exp", "iat", "iss", "aud", "sub"]},
            )
        except jwt.PyJWKClientError as e:
            logger.error(f"[AUTH] Could not load Google signing keys: {e}")
            raise AuthenticationError("Could not verify Google credential") from e
        except jwt.PyJWTError as e:
            logger.warning(f"[AUTH] Google credential rejected: {e}")
            raise AuthenticationError("Invalid Google credential") from e

        if claims.get("iss") not in GOOGLE_ISSUERS:
            raise AuthenticationError("Invalid Google credential issuer")
        if not claims.get("email"):
            raise AuthenticationError("Google credential has no email")
        if claims.get("email_verified") not in (True, "true"):
            raise AuthenticationError("Google email address is not verified")

        return claims


@dataclass(frozen=True)
class LoginResult:
    token: str
    claims: SessionClaims
    user: User


class AuthService:
    """Service xử lý session tokens"""

    def __init__(
        self,
        settings: Settings,
        verifier: IdentityVerifier,
        user_service: UserService,
        clock: Callable[[], float] = time.time
    ):
        self.settings = settings
        self.verifier = verifier
        self.user_service = user_service
        self.clock = clock

    async def authenticate(self, credential: Optional[str]) -> LoginResult:
        """
        Exchange an identity credential for a session token

        Business rules:
        - Credential must be verified by the provider before any claim is read
        - is_admin comes from the server allow-list only

        Raises:
            ValidationError: Credential missing
            AuthenticationError: Credential fails verification
        """
        if not credential or not isinstance(credential, str) or not credential.strip():
            raise ValidationError("Missing identity credential")

        # Key fetch is blocking network I/O
        identity = await asyncio.to_thread(self.verifier.verify, credential.strip())

        email = str(identity["email"]).lower()
        user = await self.user_service.register(
            email=email,
            name=identity.get("name") or "",
            picture=identity.get("picture"),
        )
        token, claims = self.issue_token(email, user.name, user.avatar)
        logger.info(f"[AUTH] Session issued for {email} (admin={claims.is_admin})")
        return LoginResult(token=token, claims=claims, user=user)

    def issue_token(self, subject: str, name: str = "", picture: Optional[str] = None):
        """
        Sign a session token for an already verified subject

        Returns:
            (token, claims)
        """
        issued_at = int(self.clock())
        claims = SessionClaims(
            subject=subject,
            name=name,
            picture=picture,
            is_admin=self.settings.is_admin_email(subject),
            issued_at=issued_at,
            expires_at=issued_at + self.settings.session_ttl_seconds,
        )
        payload = claims.to_payload()
        payload["iss"] = SESSION_ISSUER
        token = jwt.encode(payload, self.settings.jwt_secret, algorithm=SESSION_ALGORITHM)
        return token, claims

    def authorize(self, token: Optional[str]) -> SessionClaims:
        """
        Verify a session token

        Raises:
            InvalidSessionError: Missing, malformed, tampered or expired token
        """
        if not token:
            raise InvalidSessionError("Missing session token")

        try:
            payload = jwt.decode(
                token,
                self.settings.jwt_secret,
                algorithms=[SESSION_ALGORITHM],
                issuer=SESSION_ISSUER,
                options={"require": ["sub", "iat", "exp", "iss"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidSessionError("Session expired, please sign in again") from e
        except jwt.PyJWTError as e:
            raise InvalidSessionError("Invalid session token") from e

        try:
            return SessionClaims.from_payload(payload)
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidSessionError("Invalid session token") from e

    def require_admin(self, claims: SessionClaims) -> SessionClaims:
        if not claims.is_admin:
            raise AuthorizationError("Admin privileges required")
        return claims
