"""
Unit tests for VoiceStudioClient

Runs the client against a small aiohttp test server that mimics the
job endpoints.
"""
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp import test_utils

from app.client.api_client import VoiceStudioClient, error_for_response
from app.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    InsufficientCreditsError,
    InternalError,
    InvalidSessionError,
    NotFoundError,
    ValidationError,
)

GOOD_TOKEN = "good-token"


def fake_api() -> web.Application:
    polls = {"J1": 0}

    def authorized(request: web.Request) -> bool:
        return request.headers.get("Authorization") == f"Bearer {GOOD_TOKEN}"

    async def submit(request: web.Request):
        if not authorized(request):
            return web.json_response({"detail": "Invalid session token", "code": "invalid_session"}, status=401)
        body = await request.json()
        if not body.get("text"):
            return web.json_response({"detail": "Text cannot be empty", "code": "validation_error"}, status=400)
        return web.json_response({"id": "J1", "status": "queued"}, status=202)

    async def status(request: web.Request):
        if not authorized(request):
            return web.json_response({"detail": "Invalid session token", "code": "invalid_session"}, status=401)
        job_id = request.match_info["job_id"]
        if job_id not in polls:
            return web.json_response({"detail": "Job not found", "code": "not_found"}, status=404)
        polls[job_id] += 1
        if polls[job_id] < 2:
            return web.json_response({"id": job_id, "status": "processing"})
        return web.json_response({"id": job_id, "status": "completed", "result_reference": "https://a.wav"})

    app = web.Application()
    app.router.add_post("/api/jobs", submit)
    app.router.add_get("/api/jobs/{job_id}", status)
    return app


@pytest_asyncio.fixture
async def server():
    server = test_utils.TestServer(fake_api())
    await server.start_server()
    yield server
    await server.close()


class TestErrorMapping:

    @pytest.mark.parametrize("status,code,expected", [
        (400, "validation_error", ValidationError),
        (402, "insufficient_credits", InsufficientCreditsError),
        (401, "authentication_failed", AuthenticationError),
        (401, "invalid_session", InvalidSessionError),
        (403, "forbidden", AuthorizationError),
        (404, "not_found", NotFoundError),
        (503, "", InternalError),
    ])
    def test_status_mapping(self, status, code, expected):
        error = error_for_response(status, {"detail": "nope", "code": code})
        assert type(error) is expected

    def test_non_json_body(self):
        error = error_for_response(500, None)
        assert isinstance(error, InternalError)
        assert "500" in error.message


class TestVoiceStudioClient:

    @pytest.mark.asyncio
    async def test_convert_polls_to_completion(self, server):
        base_url = str(server.make_url(""))
        async with VoiceStudioClient(base_url, token=GOOD_TOKEN, poll_interval=0.01) as client:
            result = await client.convert("Xin chào", "v1")

        assert result.succeeded
        assert result.result_reference == "https://a.wav"

    @pytest.mark.asyncio
    async def test_validation_error_raised(self, server):
        async with VoiceStudioClient(str(server.make_url("")), token=GOOD_TOKEN) as client:
            with pytest.raises(ValidationError, match="Text cannot be empty"):
                await client.submit("", "v1")

    @pytest.mark.asyncio
    async def test_invalid_session_clears_token(self, server):
        async with VoiceStudioClient(str(server.make_url("")), token="stale") as client:
            with pytest.raises(InvalidSessionError):
                await client.get_status("J1")
            assert client.token is None

    @pytest.mark.asyncio
    async def test_unknown_job(self, server):
        async with VoiceStudioClient(str(server.make_url("")), token=GOOD_TOKEN) as client:
            with pytest.raises(NotFoundError):
                await client.get_status("nope")

    @pytest.mark.asyncio
    async def test_requires_open_session(self):
        client = VoiceStudioClient("http://localhost:1")
        with pytest.raises(RuntimeError):
            await client.me()
