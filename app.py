"""
app.py: FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires the room service, registers routers and middleware, and seeds the
sample rooms before the first request is served.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.controllers.middleware import RateLimitMiddleware, RequestLoggingMiddleware
from backend.controllers.room_controller import router as room_router
from backend.controllers.system_controller import router as system_router
from backend.repository.room_repository import RoomRepository
from backend.services.room_service import RoomService
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger
from backend.utils.rate_limiter import FixedWindowRateLimiter


logger = get_logger(__name__)


def _format_validation_error(exc: RequestValidationError) -> str:
    missing = [
        str(error["loc"][-1])
        for error in exc.errors()
        if error.get("type") == "missing" and error.get("loc")
    ]
    if missing:
        return "Missing required fields: " + ", ".join(missing)
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(messages) or "Invalid request"


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": _format_validation_error(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Internal server error"},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    The room service is constructed here and exposed through app.state;
    routes resolve it with the get_room_service dependency.
    """
    settings = settings or get_settings()

    # --- Repository (in-memory room collection) ---
    repository = RoomRepository()

    # --- Services ---
    room_service = RoomService(repository=repository, settings=settings)
    rate_limiter = FixedWindowRateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Seed the inventory before accepting requests."""
        _startup(app)
        yield
        logger.info("Shutdown: in-memory room inventory discarded")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # --- Middleware (last added runs first) ---
    app.add_middleware(RateLimitMiddleware, limiter=rate_limiter)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    # --- Routers ---
    app.include_router(system_router)
    app.include_router(room_router, prefix=settings.api_prefix)

    # --- Inject services into app.state for dependency resolution ---
    app.state.settings = settings
    app.state.repository = repository
    app.state.room_service = room_service
    app.state.rate_limiter = rate_limiter

    return app


def _startup(app: FastAPI) -> None:
    room_service: RoomService = app.state.room_service

    logger.info("Startup: seeding sample rooms")
    seeded = room_service.initialize()
    logger.info("Startup complete: %d rooms seeded, system ready", seeded)


# Module-level app object for uvicorn
app = create_app()
