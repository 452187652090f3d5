"""Main application entry point.

Runs FastAPI with NiceGUI mounted for the chat interface.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI handles the API routes, NiceGUI handles the UI at ``/``.
    """
    import uvicorn
    from nicegui import ui

    from chat_relay.api.app import create_app
    from chat_relay.config import get_settings
    from chat_relay.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    settings = get_settings()
    app = create_app(settings)

    # Mount NiceGUI onto FastAPI
    ui.run_with(
        app,
        title="AI Chat",
        favicon="🤖",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "chat-relay-secret"),
    )

    logger.info(f"Server listening on http://localhost:{settings.port}")
    logger.info(f"API docs available at http://localhost:{settings.port}/docs")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
