"""
Session Domain Model

SessionClaims is the verified identity a session token carries.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SessionClaims:
    """
    Value Object cho session identity
    Immutable - produced by token verification only
    """
    subject: str
    name: str
    picture: Optional[str]
    is_admin: bool
    issued_at: int
    expires_at: int

    def __post_init__(self):
        if not self.subject:
            raise ValueError("Session subject cannot be empty")
        if self.expires_at <= self.issued_at:
            raise ValueError("Session must expire after it is issued")

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at

    @property
    def expires_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.expires_at, tz=timezone.utc)

    def to_payload(self) -> Dict[str, Any]:
        """Claims in JWT form"""
        return {
            "sub": self.subject,
            "name": self.name,
            "picture": self.picture,
            "is_admin": self.is_admin,
            "iat": self.issued_at,
            "exp": self.expires_at,
        }

    @staticmethod
    def from_payload(payload: Dict[str, Any]) -> "SessionClaims":
        return SessionClaims(
            subject=str(payload["sub"]),
            name=str(payload.get("name") or ""),
            picture=payload.get("picture"),
            is_admin=payload.get("is_admin") is True,
            issued_at=int(payload["iat"]),
            expires_at=int(payload["exp"]),
        )
