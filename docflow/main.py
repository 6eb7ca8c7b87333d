"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, docflow.api, docflow.observability, docflow.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docflow.api.deps import get_service_cache
from docflow.api.routers import health_router, progress_stream_router, uploads_router
from docflow.boundary.db import dispose_engine
from docflow.boundary.db.create_tables import create_all_tables
from docflow.configs import get_settings
from docflow.observability.logger import configure_logging
from docflow.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging, creates tables and pre-warms shared services on
    startup; releases the database engine on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "Application startup: logging configured",
        extra={"environment": settings.environment},
    )

    try:
        if settings.database.create_tables_on_startup:
            await create_all_tables()

        cache = get_service_cache()
        _ = cache.progress_broker
        _ = cache.document_pipeline
        _ = cache.file_storage
        logger.info("Application startup complete: services initialized")
    except Exception as e:
        logger.exception(
            "Failed to initialize application resources",
            extra={"error": str(e)},
        )
        raise

    yield

    get_service_cache().clear()
    await dispose_engine()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Docflow Upload API",
        description="Document upload with chunk-and-embed processing and progress streaming",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Observability middleware (added first = last to execute)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(uploads_router)
    app.include_router(progress_stream_router)

    return app


app = create_app()


def run() -> None:
    """Run the API with uvicorn using server settings."""
    settings = get_settings()
    uvicorn.run(
        "docflow.main:app",
        host=settings.server.host,
        port=settings.server.port,
    )


if __name__ == "__main__":
    run()
