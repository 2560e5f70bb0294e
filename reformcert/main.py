"""
main.py — reformcert FastAPI application entry point.

Start with: uvicorn reformcert.main:app --reload --port 8000
"""
import logging
import os
import subprocess
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from reformcert.config import settings
from reformcert.engine.errors import RenovationInputError

# ---------------------------------------------------------------------------
# Logging: configured before anything else
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan: startup & shutdown hooks
# ---------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
      1. Run Alembic migrations
      2. Load work catalogs (fails fast on a malformed table)
      3. Initialize Redis connection pool for the rate limiter
    Shutdown:
      1. Close Redis pool
    """
    # --- 1. Database: run Alembic migrations ---
    package_dir = os.path.dirname(os.path.abspath(__file__))
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        capture_output=True,
        text=True,
        cwd=package_dir,
    )
    if result.returncode != 0:
        logger.error("Alembic migration failed:\n%s", result.stderr)
        raise RuntimeError(f"Alembic migration failed: {result.stderr}")
    msg = result.stdout.strip() or "No pending migrations"
    logger.info("Alembic: %s", msg)

    # --- 2. Catalogs: built once per process ---
    from reformcert.engine.catalogs import load_catalogs
    load_catalogs()

    # --- 3. Redis: rate limiter pool ---
    app.state.redis = None
    if settings.rate_limit_enabled:
        from reformcert.cache import create_redis_pool
        app.state.redis = await create_redis_pool()

    logger.info("reformcert v%s starting up", settings.app_version)
    yield

    # --- Shutdown ---
    if app.state.redis is not None:
        await app.state.redis.aclose()
        logger.info("Redis connection pool closed")
    logger.info("reformcert shutting down")


# ---------------------------------------------------------------------------
# FastAPI application instance
# ---------------------------------------------------------------------------
app = FastAPI(
    title="reformcert API",
    version=settings.app_version,
    description=(
        "Renovation work certificate deduction engine. Calculates per-category "
        "deductible amounts for Japanese home-renovation tax deductions and "
        "combines them under the certificate-wide ceiling."
    ),
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Error response helper
# ---------------------------------------------------------------------------
def _make_error_response(
    code: str,
    message: str,
    details: list[dict[str, Any]] | None = None,
    status_code: int = 500,
) -> JSONResponse:
    """Build a standard {error: {code, message, details}} response."""
    body = {
        "error": {
            "code": code,
            "message": message,
            "details": details or [],
        }
    }
    return JSONResponse(status_code=status_code, content=body)


# ---------------------------------------------------------------------------
# Global exception handlers: registered BEFORE routers
# ---------------------------------------------------------------------------
@app.exception_handler(RenovationInputError)
async def renovation_input_error_handler(
    request: Request, exc: RenovationInputError
) -> JSONResponse:
    """
    Engine input errors (unknown work type, bad quantity / ratio, malformed
    work entry). Caller-correctable, so always 400 and never retried.
    """
    logger.info("Rejected input on %s: code=%s field=%s", request.url.path, exc.code, exc.field)
    return _make_error_response(
        code=exc.code,
        message=exc.issue,
        details=[exc.to_detail()],
        status_code=400,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Malformed request shape (e.g. works not an array, unknown category).
    Returns ALL field violations in one 400 response.
    """
    details = []
    for error in exc.errors():
        # Build dot-notation field path, excluding the top-level 'body' loc
        field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
        details.append({"field": field or None, "issue": error["msg"]})
    return _make_error_response(
        code="VALIDATION_ERROR",
        message="Request validation failed",
        details=details,
        status_code=400,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Converts HTTPException to standard error format with semantic code."""
    code_map = {
        400: "BAD_REQUEST",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        409: "CONFLICT",
        422: "VALIDATION_ERROR",
        429: "RATE_LIMITED",
    }
    code = code_map.get(exc.status_code, f"HTTP_{exc.status_code}")
    response = _make_error_response(
        code=code,
        message=str(exc.detail),
        status_code=exc.status_code,
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """
    Catch-all for unexpected errors.
    DEBUG=true  → includes exception type & message in details (dev only).
    DEBUG=false → generic message; full traceback logged server-side only.
    """
    logger.error(
        "Unhandled exception on %s %s",
        request.method,
        request.url.path,
        exc_info=True,
    )
    if settings.debug:
        details = [{"issue": f"{type(exc).__name__}: {exc}"}]
        message = "An unexpected error occurred (debug details included)"
    else:
        details = []
        message = "An unexpected error occurred"
    return _make_error_response(
        code="INTERNAL_ERROR",
        message=message,
        details=details,
        status_code=500,
    )


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------
@app.get("/api/health", tags=["System"])
async def health_check() -> dict:
    """Returns service health status."""
    return {
        "status": "ok",
        "version": settings.app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from reformcert.engine.routes import router as engine_router  # noqa: E402
from reformcert.certificates.routes import router as certificates_router  # noqa: E402

app.include_router(engine_router)
app.include_router(certificates_router)
