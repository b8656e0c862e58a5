"""
Exercise Tracker — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the store client, registers middleware,
       exception handlers, routes and static assets, and returns the app.
Who:   uvicorn imports `exercise_tracker.main:app`; tests call create_app()
       with their own Settings and Database.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:                                            │
    │    GET /            GET /public/*     GET /health   │
    │    GET|POST /api/users                              │
    │    POST /api/users/{_id}/exercises                  │
    │    GET  /api/users/{_id}/logs                       │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError→400  NotFound→404  Database→500  │
    │                                                     │
    │  app.state.database: Database (store client)        │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, probe the database (failure is logged,
              the server still starts)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from exercise_tracker import __version__
from exercise_tracker.config import Settings, settings as default_settings
from exercise_tracker.database import Database
from exercise_tracker.exceptions import (
    DatabaseError,
    ExerciseTrackerError,
    NotFoundError,
    ValidationError,
)
from exercise_tracker.middleware.logging import RequestLoggingMiddleware
from exercise_tracker.middleware.request_id import RequestIDMiddleware, request_id_var
from exercise_tracker.routes import health, index, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Handler: stdout (container runtimes capture it)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, database probe. Shutdown: dispose the engine.

    A failed probe does not abort startup. The process keeps serving and
    /health answers 503 until the database becomes reachable.
    """
    app_settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("Exercise Tracker starting up...")

    if not await database.connect(attempts=app_settings.db_connect_attempts):
        logger.error("Starting without a reachable database; requests will fail until it recovers.")

    logger.info("Your app is listening on port %d", app_settings.port)
    logger.info("=" * 60)

    yield

    logger.info("Exercise Tracker shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        ValidationError            → 400 Bad Request
        NotFoundError              → 404 Not Found
        DatabaseError              → 500 (fixed message, context logged only)
        ExerciseTrackerError (base)→ 500
        Exception (fallback)       → 500 (stack trace logged only)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(ExerciseTrackerError)
    async def handle_application_error(request: Request, exc: ExerciseTrackerError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic 500, stack trace logged server-side only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: configuration; defaults to the environment-loaded singleton
        database:     store client; defaults to one built from app_settings

    Returns:
        Configured FastAPI instance. The store client is available as
        `app.state.database` before startup, so tests that skip the
        lifespan can still use it.
    """
    app_settings = app_settings or default_settings
    database = database or Database.from_settings(app_settings)

    app = FastAPI(
        title="Exercise Tracker API",
        description="Create users, log their exercises and query exercise logs.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(index.router)
    app.include_router(users.router)
    app.include_router(health.router)
    app.mount("/public", StaticFiles(directory=index.PUBLIC_DIR), name="public")

    return app


# uvicorn expects `exercise_tracker.main:app` to be importable
app = create_app()
