"""Application factory for the FastAPI app.

Builds the app and the objects it owns: one ``ApiQueue`` for the upstream
generative-text endpoint and the ``ChatService`` that feeds it. Both live on
``app.state`` for the lifetime of the process.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from guide_api.adapters.llm.base import AbstractLLMClient
from guide_api.api.routes import chat_router, health_router
from guide_api.core.config import parse_origins, settings
from guide_api.core.exception_handlers import setup_exception_handlers
from guide_api.core.logging import configure_logging
from guide_api.core.middleware import request_id_middleware
from guide_api.services.chat_service import ChatService
from guide_api.utils.api_queue import ApiQueue

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(
        "app.startup",
        extra={
            "app_env": settings.app_env,
            "provider": settings.llm.provider,
            "model": settings.llm.model,
            "has_api_key": bool(settings.llm.api_key),
        },
    )
    yield
    dropped = await app.state.llm_queue.shutdown()
    logger.info("app.shutdown", extra={"dropped_requests": dropped})


def create_app(llm: AbstractLLMClient | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        llm: Optional LLM client; built from settings on first chat request
            when omitted.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Mangystau Guide Assistant API",
        description=(
            "Proxy between the Mangystau tourism app and a generative-text "
            "provider. Chat calls are forwarded one at a time, in arrival order."
        ),
        version="0.1.0",
        debug=settings.app.debug,
        lifespan=lifespan,
    )

    app.state.llm_queue = ApiQueue(name=settings.llm.provider)
    app.state.chat_service = ChatService(
        app.state.llm_queue,
        llm,
        timeout_seconds=settings.app.chat_timeout_seconds,
    )

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_origins(settings.app.cors_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_id_middleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(chat_router, prefix="/api")
    app.include_router(health_router, prefix="/api")

    return app
