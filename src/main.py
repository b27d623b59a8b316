"""
Main FastAPI application entry point.

Creates the application, wires middleware, exception handlers and routers,
and manages database lifetime.

Settings are loaded (and mandatory secrets checked) when ``src.core.config``
is imported, so a misconfigured process exits before serving a request.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.config import settings
from src.core.container import get_database, get_logger
from src.presentation.routers import system_router, v1_router
from src.presentation.routers.api.middleware.trace_middleware import TraceMiddleware
from src.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: create tables
    - Shutdown: dispose the database engine

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    database = get_database()

    await database.create_all()
    logger.info(
        "application_started",
        environment=settings.environment.value,
        version=settings.app_version,
    )

    yield

    await database.close()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    description="Authentication session service",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Cookies need credentialed CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Trace-Id", "Retry-After"],
)

# Wire trace middleware (request correlation)
app.add_middleware(TraceMiddleware)

register_exception_handlers(app)

app.include_router(system_router)
app.include_router(v1_router)
