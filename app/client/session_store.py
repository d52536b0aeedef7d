"""
Client-side session storage

Keeps the session token on disk between runs. Claims decoded here are
NOT verified (the client has no signing key); use them for display only
and let the server decide every access question.
"""
import json
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import jwt

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".voice_studio" / "session.json"


@dataclass(frozen=True)
class StoredSession:
    token: str
    claims: Dict[str, Any]

    @property
    def subject(self) -> str:
        return str(self.claims.get("sub", ""))

    @property
    def display_name(self) -> str:
        return str(self.claims.get("name") or self.subject)

    @property
    def shows_admin_menu(self) -> bool:
        """Cosmetic only, the server re-checks admin rights on every call"""
        return self.claims.get("is_admin") is True


def decode_unverified(token: str) -> Dict[str, Any]:
    return jwt.decode(token, options={"verify_signature": False, "verify_exp": False})


class SessionStore:

    def __init__(self, path: Union[str, Path, None] = None, clock: Callable[[], float] = time.time):
        self.path = Path(path) if path else DEFAULT_PATH
        self.clock = clock

    def save(self, token: str) -> StoredSession:
        claims = decode_unverified(token)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps({"token": token}), encoding="utf-8")
        os.replace(tmp, self.path)
        return StoredSession(token=token, claims=claims)

    def load(self) -> Optional[StoredSession]:
        """
        Stored session, or None

        A malformed or expired token counts as no session and is removed.
        """
        if not self.path.exists():
            return None

        try:
            token = json.loads(self.path.read_text(encoding="utf-8"))["token"]
            claims = decode_unverified(token)
            expires_at = float(claims["exp"])
        except (OSError, ValueError, KeyError, TypeError, jwt.PyJWTError) as e:
            logger.warning(f"[SESSION] Dropping unreadable session: {e}")
            self.clear()
            return None

        if self.clock() >= expires_at:
            logger.info("[SESSION] Stored session expired")
            self.clear()
            return None

        return StoredSession(token=token, claims=claims)

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
