"""
MiniNote Backend - FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) builds the stores, registers
       middleware, exception handlers and routes, and returns the app.
Who:   uvicorn (`uvicorn --factory mininote.main:create_app`) or the
       `mininote` console script. Importing this module builds no app and
       creates no directories; SAVE_PATH is created when an app is built.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌────────┐ ┌─────────┐ ┌──────────┐ ┌───────────┐  │
    │  │ Req ID │→│ Logging │→│ No-Cache │→│ GZip, CORS│  │
    │  └────────┘ └─────────┘ └──────────┘ └───────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ static assets│ │ /upload,/_tmp│ │ /, /{slug}  │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Slug→303 │ Capacity→403 │ NotFound→404        │  │
    │  │ Upload→400/403 │ Storage→500                  │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

State:
    app.state.settings       frozen Settings
    app.state.note_store     NoteStore on SAVE_PATH
    app.state.note_service   NoteService (limits around the store)
    app.state.upload_store   UploadStore on SAVE_PATH
    app.state.static_assets  StaticAssets on STATIC_ROOT
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse, Response

from mininote import __version__
from mininote.config import Settings, get_settings
from mininote.exceptions import (
    CapacityError,
    NotFoundError,
    SlugValidationError,
    StorageError,
    UnsupportedMediaTypeError,
    UploadError,
)
from mininote.middleware.cache_control import NO_CACHE_HEADERS, NoCacheMiddleware
from mininote.middleware.logging import RequestLoggingMiddleware
from mininote.middleware.request_id import RequestIDMiddleware, request_id_var
from mininote.routes import notes, static, uploads
from mininote.services.assets import StaticAssets
from mininote.services.note_store import NoteStore
from mininote.services.notes import NoteService
from mininote.services.upload_store import UploadStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output goes to stdout so container runtimes capture it.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's own access log duplicates mininote.access
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Configure logging, then log startup and shutdown.

    The stores are built by create_app(), not here, so the app is fully
    usable even by ASGI transports that skip the lifespan protocol.
    """
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("MiniNote %s starting up...", __version__)
    logger.info("Note root: %s", app.state.note_store.root)
    logger.info("Static root: %s", app.state.static_assets.root)
    logger.info(
        "Limits: file_limit=%d single_file_size_limit=%d upload_size_limit=%d",
        settings.file_limit,
        settings.single_file_size_limit,
        settings.upload_size_limit,
    )
    logger.info("Listening on http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    logger.info("MiniNote shutting down...")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        SlugValidationError → 303 redirect to a new note id
        CapacityError       → 403 Forbidden, empty body
        NotFoundError       → 404 Not Found, empty body
        UnsupportedMediaTypeError → 415, empty body
        UploadError         → 400/403 with a short text body
        StorageError        → 500, empty body
        Exception           → 500, empty body (unexpected errors)

    Responses never contain paths or OS error text; those are logged.
    """

    @app.exception_handler(SlugValidationError)
    async def handle_invalid_slug(request: Request, exc: SlugValidationError):
        """Bad or guessed id: start a new note instead of showing an error."""
        logger.debug("[%s] %s, redirecting", request_id_var.get(""), exc.message)
        return notes.redirect_to_new_note(request.app.state.settings)

    @app.exception_handler(CapacityError)
    async def handle_capacity_error(request: Request, exc: CapacityError):
        logger.error("[%s] %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return Response(status_code=403)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return Response(status_code=404)

    @app.exception_handler(UnsupportedMediaTypeError)
    async def handle_unsupported_media_type(request: Request, exc: UnsupportedMediaTypeError):
        logger.warning("[%s] %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return Response(status_code=415)

    @app.exception_handler(UploadError)
    async def handle_upload_error(request: Request, exc: UploadError):
        logger.warning(
            "[%s] Upload rejected: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logger.error(
            "[%s] Storage error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return Response(status_code=500)

    # Runs in ServerErrorMiddleware, outside NoCacheMiddleware and
    # RequestIDMiddleware, so it sets those headers itself.
    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        headers = dict(NO_CACHE_HEADERS)
        request_id = request_id_var.get("")
        if request_id:
            headers["X-Request-ID"] = request_id
        return Response(status_code=500, headers=headers)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration for this app. Defaults to get_settings(),
                  i.e. the process environment.

    Returns: Fully configured FastAPI instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="MiniNote",
        description="Anonymous notes addressed by short ids, stored as plain files.",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Components ────────────────────────────────────────────────────────
    note_store = NoteStore(settings.save_path)
    app.state.settings = settings
    app.state.note_store = note_store
    app.state.note_service = NoteService(
        note_store,
        file_limit=settings.file_limit,
        size_limit=settings.single_file_size_limit,
    )
    app.state.upload_store = UploadStore(settings.save_path, max_size=settings.upload_size_limit)
    app.state.static_assets = StaticAssets(settings.static_root)

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(NoCacheMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    # /{slug} matches every path, so notes go last
    app.include_router(static.router)
    app.include_router(uploads.router)
    app.include_router(notes.router)

    return app


def run() -> None:
    """Console entry point: serve the app on HOST:PORT with uvicorn."""
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)

