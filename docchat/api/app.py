"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
exception handlers and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docchat import __version__
from docchat.api.auth import router as auth_router
from docchat.api.chat import router as chat_router
from docchat.api.errors import register_exception_handlers
from docchat.api.middleware import route_guard
from docchat.api.upload import router as upload_router
from docchat.relay.config import get_relay_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log startup configuration and shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    config = get_relay_config()
    logger.info(f"Starting DocChat API (backend: {config.backend})...")
    if config.backend == "workflow" and not config.workflow.is_configured:
        logger.warning("N8N_BASE_URL / N8N_WEBHOOK_PATH not set; chat requests will fail")
    yield
    logger.info("Shutting down DocChat API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="DocChat API",
        description=(
            "Chat relay between the browser and a hosted language model or "
            "workflow webhook. Streams answers as server-sent events and "
            "accepts PDF and Word attachments whose text is added to prompts."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.middleware("http")(route_guard)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    register_exception_handlers(application)

    application.include_router(chat_router)
    application.include_router(upload_router)
    application.include_router(auth_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "docchat"}

    return application


app = create_app()
