from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
import os
import logging
from contextlib import asynccontextmanager

from .core.logger import configure_logging
from .core.container import container
from .core.exceptions import VoiceStudioError
from .core.seed import seed_demo_data

# Configure Logging
configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    log_file=os.environ.get("LOG_FILE", "server_debug.log")
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- STARTUP ---
    settings = container.settings()
    if not settings.google_client_id:
        logger.warning("[STARTUP] GOOGLE_CLIENT_ID not set, every sign-in will be rejected")
    logger.info(f"[STARTUP] Admin allow-list has {len(settings.admin_emails)} entries")

    await seed_demo_data(
        container.user_repository(),
        container.plan_repository(),
        container.discount_code_repository(),
        container.transaction_repository()
    )

    logger.info("[OK] Auto-starting workers...")
    worker_manager = container.worker_manager()
    await worker_manager.start_all()

    yield

    # --- SHUTDOWN ---
    logger.warning("[SHUTDOWN] Application shutdown triggered. Stopping workers...")
    await worker_manager.stop_all()

    pending = await container.job_repository().get_active_jobs()
    if pending:
        # In-memory jobs die with the process
        logger.warning(f"[SHUTDOWN] {len(pending)} unfinished jobs will be lost")
    logger.info("[OK] Shutdown complete.")


app = FastAPI(title="AI Voice Studio", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(container.settings().cors_origins),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VoiceStudioError)
async def handle_app_error(request: Request, exc: VoiceStudioError):
    if exc.status_code >= 500:
        logger.error(f"[ERROR] {request.method} {request.url.path}: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
        headers=headers
    )


@app.exception_handler(RequestValidationError)
async def handle_invalid_body(request: Request, exc: RequestValidationError):
    """Malformed JSON, a missing body and mistyped fields all answer 400"""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "invalid request"
    return JSONResponse(
        status_code=400,
        content={"detail": f"Invalid request body ({message})", "code": "validation_error"}
    )


# ========== Include API Routers ==========
from .api.routers import admin, auth, billing, catalog, jobs

app.include_router(auth.router, prefix="/api")
app.include_router(jobs.router, prefix="/api")
app.include_router(catalog.router, prefix="/api")
app.include_router(billing.router, prefix="/api")
app.include_router(admin.router, prefix="/api")


@app.get("/healthz")
def healthz():
    return {"ok": True}


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=int(os.environ.get("PORT", "3001")), reload=True)
