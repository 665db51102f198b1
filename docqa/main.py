"""
FastAPI application entry point.

Initializes FastAPI app, registers routers and exception handlers, adds
middleware, and configures lifespan.

Dependencies: fastapi, uvicorn, python-dotenv, docqa.api, docqa.observability, docqa.configs
System role: Application initialization and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docqa.api import api_router
from docqa.api.deps import get_service_cache
from docqa.api.error_handlers import register_exception_handlers
from docqa.configs import get_settings
from docqa.observability.logger import configure_logging
from docqa.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

load_dotenv()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging, pre-warms the service cache on startup and clears it
    on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    cache = get_service_cache()
    if settings.environment != "test":
        logger.info("Pre-warming service cache...")
        _ = cache.qa_service
        _ = cache.chat_service
        logger.info(
            "Service cache pre-warmed",
            extra={"vector_store": settings.vector_store.store_type},
        )

    yield

    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="Document Q&A API",
        description="Retrieval-augmented question answering over PDF and DOCX documents",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Observability middleware (CorrelationMiddleware runs outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "docqa.main:app",
        host=settings.server.host,
        port=settings.server.port,
    )


if __name__ == "__main__":
    run()
