"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chat_relay import __version__
from chat_relay.api.chat import router as chat_router
from chat_relay.config import Settings, get_settings
from chat_relay.models.schemas import HealthResponse
from chat_relay.relay.service import RelayService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    settings: Settings = app.state.settings
    logger.info("Starting Chat Relay API...")
    logger.info(f"Using OpenAI model: {settings.openai_model}")
    if not settings.has_api_key:
        logger.warning("Missing OPENAI_API_KEY in the environment; chat requests will fail")
    yield
    logger.info("Shutting down Chat Relay API...")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings. Loads from environment if not provided.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    application = FastAPI(
        title="Chat Relay API",
        description=(
            "Relays chat conversations to an upstream language model and "
            "returns the reply, either complete or streamed as it is generated."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.relay_service = RelayService(settings)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(chat_router)

    @application.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Report liveness, independent of upstream credentials."""
        return HealthResponse(ok=True)

    return application


app = create_app()
