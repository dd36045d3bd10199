"""
Main entrypoint for the Help Hive Events API.

This module assembles the FastAPI application: logging, CORS, request
logging, error handlers and the API routers.  ``create_app`` builds
and configures the app; the module-level ``app`` makes it easy to run
with uvicorn or another ASGI server, e.g.::

    uvicorn help_hive_api.app.main:app --port 5000

The MongoDB connection is opened in the application lifespan (unless a
``Database`` is passed to ``create_app``), indexes are ensured, sample
data is seeded into an empty database, and the connection is closed on
shutdown.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import Database, connect
from .core.logging_config import setup_logging
from .services.seed_service import SeedService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    database: Optional[Database] = app.state.database
    if database is None:
        database = await run_in_threadpool(connect, settings)
        app.state.database = database
    try:
        await run_in_threadpool(database.ensure_indexes)
        if settings.seed_sample_data:
            await SeedService.seed_sample_data(database)
        yield
    finally:
        database.close()
        logger.info("MongoDB connection closed")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid {field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"message": message})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the environment-derived
        module settings.
    database : Optional[Database]
        An already connected database handle.  When omitted the
        lifespan connects using ``settings``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so startup messages are
    # formatted consistently.
    setup_logging(settings.log_level)

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    request_logger = logging.getLogger("help_hive_api.requests")

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            request_logger.info(
                "%s %s -> %s (%.1f ms)", request.method, request.url.path, status_code, elapsed_ms
            )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/", include_in_schema=False)
    async def read_root() -> dict:
        return {"message": f"{settings.project_name} is running"}

    app.include_router(api_router, prefix="/api")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
