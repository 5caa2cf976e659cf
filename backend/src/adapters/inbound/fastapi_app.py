"""
FastAPI application - primary inbound adapter.
"""
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.src.core.exceptions import StorageUnavailableError, UserProfileError
from backend.src.infrastructure.config import Settings
from backend.src.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)

settings = Settings()

# Auth-exempt paths (no Bearer token needed)
_AUTH_EXEMPT_PREFIXES = (
    "/api/health", "/api/config/firebase",
    "/docs", "/openapi.json", "/redoc",
)

_STATUS_BY_CODE = {
    "invalid_argument": 400,
    "unauthorized": 401,
    "forbidden": 403,
    "not_found": 404,
    "conflict": 409,
    "internal": 500,
}
_CODE_BY_STATUS = {status: code for code, status in _STATUS_BY_CODE.items()}
_CODE_BY_STATUS[405] = "method_not_allowed"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    setup_logging(settings.logging.level)
    settings.validate_production()
    logger.info("User profile backend starting up (env=%s, store=%s)...",
                settings.app_env, settings.persistence_backend)
    # Tests install their own container before the app starts
    if getattr(app.state, "container", None) is None:
        from backend.src.infrastructure.container import ApplicationContainer
        app.state.container = ApplicationContainer(settings)
    yield
    logger.info("User profile backend shutting down...")


app = FastAPI(
    title="User Potential Score API",
    description="User profiles ranked by a derived potential score",
    version=settings.version,
    lifespan=lifespan,
)

_origins = settings.web.allowed_origins or ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str, code: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "code": code},
        headers=headers,
    )


def _cors_headers(request: Request) -> dict:
    """Build CORS headers for early-return responses from auth middleware.

    A short-circuited response bypasses CORSMiddleware, so the headers are
    added here to let the browser read the JSON error body.
    """
    origin = request.headers.get("origin", "")
    if not origin:
        return {}
    if _origins == ["*"] or origin in _origins:
        return {
            "access-control-allow-origin": origin,
            "access-control-allow-credentials": "true",
            "vary": "Origin",
        }
    return {}


def _auth_error(request: Request, detail: str) -> JSONResponse:
    """Return a 401 with CORS headers so the browser can read the body."""
    headers = _cors_headers(request)
    headers["cache-control"] = "no-store, no-cache, must-revalidate"
    return _error(401, detail, "unauthorized", headers)


@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    """Authenticate via Bearer token.

    Attaches ``request.state.identity`` when authentication succeeds.
    """
    path = request.url.path

    # Skip auth for CORS preflight and exempt paths
    if request.method == "OPTIONS":
        return await call_next(request)
    if any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES):
        return await call_next(request)

    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        logger.warning("Auth: missing bearer token for %s %s", request.method, path)
        return _auth_error(request, "Unauthorized: No token provided")

    token = auth_header[7:].strip()
    if not token:
        return _auth_error(request, "Unauthorized: No token provided")
    try:
        verifier = request.app.state.container.identity_verifier()
        identity = await verifier.verify_token(token)
    except Exception as exc:
        logger.warning("Bearer token verification failed: %s", exc)
        return _auth_error(request, "Unauthorized: Invalid token")
    if identity is None:
        logger.warning("Auth: verify_token returned None for %s", path)
        return _auth_error(request, "Unauthorized: Invalid token")

    logger.debug("Auth: token verified OK for uid=%s", identity.uid)
    request.state.identity = identity
    return await call_next(request)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log each request with method, path, status, and duration."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    if request.url.path.startswith("/api"):
        response.headers["cache-control"] = "no-store, no-cache, must-revalidate"
    logger.info(
        "%s %s -> %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


@app.exception_handler(StorageUnavailableError)
async def storage_error_handler(request: Request, exc: StorageUnavailableError):
    logger.exception("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return _error(500, "Internal server error", exc.code)


@app.exception_handler(UserProfileError)
async def user_profile_error_handler(request: Request, exc: UserProfileError):
    status_code = _STATUS_BY_CODE.get(exc.code, 500)
    if status_code >= 500:
        logger.error("Error on %s %s: %s", request.method, request.url.path, exc)
        return _error(status_code, "Internal server error", exc.code)
    return _error(status_code, str(exc), exc.code)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    default_code = "internal" if exc.status_code >= 500 else "invalid_argument"
    code = _CODE_BY_STATUS.get(exc.status_code, default_code)
    return _error(exc.status_code, str(exc.detail), code, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"Invalid request: {location}: {message}"
    return _error(400, message, "invalid_argument")


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc)
    return _error(500, "Internal server error", "internal")


# ── API routes ─────────────────────────────────────────────────

from backend.src.adapters.inbound.api.users import router as users_router

app.include_router(users_router, prefix="/api/users", tags=["users"])


@app.get("/api/health")
async def health():
    return {
        "status": "ok",
        "version": settings.version,
    }


@app.get("/api/config/firebase")
async def firebase_config():
    """Return public Firebase config for frontend SDK initialization."""
    return {
        "enabled": settings.firebase.enabled,
        "apiKey": settings.firebase.api_key,
        "authDomain": settings.firebase.auth_domain,
        "projectId": settings.firebase.project_id,
    }
