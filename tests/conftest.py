"""
Pytest configuration và shared fixtures
"""
import asyncio
import os
import sys
import time
from pathlib import Path
from typing import Any, Dict, Generator

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

# Add app to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# No log file during tests
os.environ.setdefault("LOG_FILE", "")

from app.config import Settings
from app.core.container import container, reset_container
from app.core.exceptions import AuthenticationError
from app.core.services.auth_service import IdentityVerifier
from app.main import app

TEST_SECRET = "test-secret-key-for-session-tokens"
ADMIN_EMAIL = "admin@aivoice.studio"


class StubIdentityVerifier(IdentityVerifier):
    """
    Accepts credentials of the form "google:<email>"

    Anything else is rejected the way a bad Google token would be.
    """

    def verify(self, credential: str) -> Dict[str, Any]:
        if not credential.startswith("google:"):
            raise AuthenticationError("Invalid Google credential")
        email = credential.split(":", 1)[1]
        return {
            "sub": f"google-{email}",
            "email": email,
            "email_verified": True,
            "name": email.split("@")[0].title(),
            "picture": f"https://example.com/{email}.png",
        }


def make_settings(**overrides) -> Settings:
    values = dict(
        jwt_secret=TEST_SECRET,
        session_ttl_seconds=3600,
        google_client_id="test-client-id",
        admin_emails=frozenset({ADMIN_EMAIL}),
        job_min_delay_seconds=0.0,
        job_max_delay_seconds=0.0,
        job_failure_marker="[[fail]]",
        job_retention_seconds=3600.0,
        job_sweep_interval_seconds=3600.0,
        signup_credits=1000,
        payment_confirm_seconds=0.0,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def test_settings() -> Settings:
    """Fast settings: no completion delay, known secret"""
    return make_settings()


@pytest.fixture
def client(test_settings) -> Generator[TestClient, None, None]:
    """FastAPI test client running against a fresh container"""
    reset_container()
    container.settings.override(providers.Object(test_settings))
    container.identity_verifier.override(providers.Object(StubIdentityVerifier()))
    with TestClient(app) as test_client:
        yield test_client
    reset_container()


def _login(client: TestClient, email: str) -> Dict[str, str]:
    """Sign in through the API and return bearer headers"""
    response = client.post("/api/auth/session", json={"credential": f"google:{email}"})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


def _wait_for_job(client: TestClient, job_id: str, headers: Dict[str, str], timeout: float = 5.0) -> dict:
    """Poll until the job reaches a terminal status"""
    deadline = time.monotonic() + timeout
    while True:
        body = client.get(f"/api/jobs/{job_id}", headers=headers).json()
        if body["status"] in ("completed", "failed"):
            return body
        if time.monotonic() > deadline:
            raise AssertionError(f"Job {job_id} still {body['status']} after {timeout}s")
        time.sleep(0.05)


@pytest.fixture
def user_headers(client) -> Dict[str, str]:
    return _login(client, "u1@example.com")


@pytest.fixture
def admin_headers(client) -> Dict[str, str]:
    return _login(client, ADMIN_EMAIL)


@pytest.fixture
def login():
    return _login


@pytest.fixture
def wait_for_job():
    return _wait_for_job


async def _wait_until(predicate, timeout: float = 3.0, interval: float = 0.01):
    """Yield to the event loop until predicate() holds"""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("Condition not met in time")
        await asyncio.sleep(interval)


@pytest.fixture
def wait_until():
    return _wait_until
