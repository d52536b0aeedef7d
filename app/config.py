"""
Application settings

All knobs are read from environment variables once at startup.
"""
import os
import secrets
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_EMAILS = "admin@aivoice.studio"


def _get_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def _get_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _split_csv(raw: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the server process"""
    jwt_secret: str
    session_ttl_seconds: int = 7 * 24 * 3600
    google_client_id: str = ""
    admin_emails: FrozenSet[str] = field(default_factory=lambda: frozenset({DEFAULT_ADMIN_EMAILS}))

    job_min_delay_seconds: float = 2.0
    job_max_delay_seconds: float = 4.0
    job_failure_marker: str = "[[fail]]"
    job_retention_seconds: float = 3600.0
    job_sweep_interval_seconds: float = 60.0

    signup_credits: int = 50000
    payment_confirm_seconds: float = 5.0

    cors_origins: Tuple[str, ...] = ("*",)

    def __post_init__(self):
        if not self.jwt_secret:
            raise ValueError("jwt_secret cannot be empty")
        if self.session_ttl_seconds <= 0:
            raise ValueError("session_ttl_seconds must be positive")
        if self.job_min_delay_seconds < 0:
            raise ValueError("job_min_delay_seconds cannot be negative")
        if self.job_min_delay_seconds > self.job_max_delay_seconds:
            raise ValueError("job_min_delay_seconds cannot exceed job_max_delay_seconds")
        if self.signup_credits < 0:
            raise ValueError("signup_credits cannot be negative")

    def is_admin_email(self, email: str) -> bool:
        return bool(email) and email.strip().lower() in self.admin_emails

    @classmethod
    def from_env(cls) -> "Settings":
        secret = os.environ.get("JWT_SECRET", "")
        if not secret:
            # Tokens issued with a random key die with the process.
            logger.warning("[CONFIG] JWT_SECRET not set, using a random per-process secret")
            secret = secrets.token_urlsafe(48)

        admins = _split_csv(os.environ.get("ADMIN_EMAILS", DEFAULT_ADMIN_EMAILS))

        return cls(
            jwt_secret=secret,
            session_ttl_seconds=_get_int("SESSION_TTL_SECONDS", 7 * 24 * 3600),
            google_client_id=os.environ.get("GOOGLE_CLIENT_ID", "").strip(),
            admin_emails=frozenset(email.lower() for email in admins),
            job_min_delay_seconds=_get_float("JOB_MIN_DELAY_SECONDS", 2.0),
            job_max_delay_seconds=_get_float("JOB_MAX_DELAY_SECONDS", 4.0),
            job_failure_marker=os.environ.get("JOB_FAILURE_MARKER", "[[fail]]"),
            job_retention_seconds=_get_float("JOB_RETENTION_SECONDS", 3600.0),
            job_sweep_interval_seconds=_get_float("JOB_SWEEP_INTERVAL_SECONDS", 60.0),
            signup_credits=_get_int("SIGNUP_CREDITS", 50000),
            payment_confirm_seconds=_get_float("PAYMENT_CONFIRM_SECONDS", 5.0),
            cors_origins=_split_csv(os.environ.get("CORS_ORIGINS", "*")) or ("*",),
        )
