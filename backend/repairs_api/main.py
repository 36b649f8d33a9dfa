"""
Repairs API — FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds the store, middleware, exception
       handlers and routes, and returns a configured FastAPI instance.
Who:   Called by uvicorn (`uvicorn repairs_api.main:app`), by the
       `repairs-api` console script, and by tests with an isolated store.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Req ID → Logging → GZip → CORS        │
    │                                                     │
    │  Routes:      /repairs[/{id}]   /health             │
    │               /.well-known/ai-plugin.json           │
    │               /api-docs  /openapi.json  /static     │
    │                                                     │
    │  Exception Handlers:                                │
    │    InvalidId/MalformedBody→400  NotFound→404        │
    │    UnsupportedMediaType→415     unexpected→500      │
    │                                                     │
    │  app.state.store: RepairStore (seeded at creation)  │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from repairs_api import __version__
from repairs_api.config import Settings, settings
from repairs_api.exceptions import RepairsAPIError
from repairs_api.middleware.logging import RequestLoggingMiddleware
from repairs_api.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from repairs_api.routes import health, plugin, repairs
from repairs_api.store import RepairStore, load_seed_repairs

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level or settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's own access log duplicates repairs.access
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config = app.state.settings
    setup_logging(config.log_level)
    logger.info("=" * 60)
    logger.info("Repairs API %s starting with %d repairs", __version__, len(app.state.store))
    logger.info("API docs: http://%s:%d/api-docs", config.backend_host, config.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Repairs API shutting down; in-memory repairs are discarded.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, message: str) -> JSONResponse:
    rid = request_id_var.get("")
    headers = {REQUEST_ID_HEADER: rid} if rid else None
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to `{"error": <message>}` responses.

    Handler hierarchy:
        RepairsAPIError (and subclasses) → exc.status_code (400 / 404 / 415)
        Exception (fallback)             → 500, details logged server-side only
    """

    @app.exception_handler(RepairsAPIError)
    async def handle_repairs_error(request: Request, exc: RepairsAPIError):
        rid = request_id_var.get("")
        logger.warning(
            "[%s] %s %s → %d %s | %s",
            rid,
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
            exc.context,
        )
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error_response(500, "An unexpected error occurred")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def build_store(config: Settings) -> RepairStore:
    """Create the process store, seeded from the configured file when enabled."""
    if not config.seed_on_startup:
        return RepairStore()
    return RepairStore(load_seed_repairs(config.seed_data_path))


def create_app(store: Optional[RepairStore] = None, config: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store:  Store to serve; built from `config` when omitted. Tests pass
                their own so each app instance is isolated.
        config: Settings to use; defaults to the module-level `settings`.
    """
    config = config or settings

    app = FastAPI(
        title="Repairs API",
        description="A simple service to manage repairs for various items",
        version=__version__,
        docs_url="/api-docs",
        redoc_url=None,
        openapi_url="/openapi.json",
        servers=[{"url": config.base_url}] if config.base_url else None,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.store = store if store is not None else build_store(config)

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER, "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(repairs.router)
    app.include_router(plugin.router)
    app.include_router(health.router)

    if config.static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=config.static_dir), name="static")
    else:
        logger.debug("Static directory %s not found; /static not mounted", config.static_dir)

    return app


def run() -> None:
    """Console entry point: serve the module-level app with uvicorn."""
    import uvicorn

    uvicorn.run("repairs_api.main:app", host=settings.backend_host, port=settings.backend_port)


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `repairs_api.main:app` to be importable
app = create_app()
