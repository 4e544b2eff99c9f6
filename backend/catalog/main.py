"""
Product Catalog Backend: FastAPI Application Factory
====================================================

What:  Builds the FastAPI application: logging, database, middleware,
       exception handlers and routes.
How:   `create_app()` returns a configured instance. The module-level `app`
       is what uvicorn serves (`uvicorn catalog.main:app`).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging                  │
    │                                                     │
    │  Routes:                                            │
    │    GET /product   GET /products   PUT /product      │
    │    DELETE /product                GET /health       │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError→400  NotFound→404  Database→500  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   configure logging, log the listen address
    Shutdown:  dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog import __version__
from catalog.config import Settings, settings as default_settings
from catalog.database import Database
from catalog.exceptions import CatalogError, DatabaseError, ValidationError
from catalog.middleware.logging import RequestLoggingMiddleware
from catalog.middleware.request_id import RequestIDMiddleware, get_request_id
from catalog.routes import health, products

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that report every request/statement at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings
    setup_logging(config.log_level)
    logger.info("Product catalog starting on http://%s:%d", config.backend_host, config.backend_port)

    yield

    logger.info("Product catalog shutting down...")
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to `{"error": message}` responses.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        NotFoundError           → 404 Not Found
        DatabaseError           → 500 (static message; context logged only)
        RequestValidationError  → 400 (FastAPI's own input validation)
        HTTPException           → its status (unknown path, wrong method)
        Exception               → 500 (traceback logged)
    """

    @app.exception_handler(CatalogError)
    async def handle_catalog_error(request: Request, exc: CatalogError):
        rid = get_request_id(request)
        if isinstance(exc, ValidationError):
            logger.warning("[%s] Validation error: %s", rid, exc.message)
        elif isinstance(exc, DatabaseError):
            logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = get_request_id(request)
        logger.warning("[%s] Request validation error: %s", rid, exc.errors())
        return _error(400, "Invalid request.")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = get_request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error(500, "Internal server error.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; defaults to the environment-loaded singleton.
        database: Database to serve from; built from `settings` when omitted.
                  Tests pass one bound to a temporary SQLite file.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Product Catalog API",
        description="Read, search, replace and delete products in a relational table.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)

    # Executes in reverse order of addition: RequestID → Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(products.router)
    app.include_router(health.router)

    return app


app = create_app()
