"""FastAPI endpoints for the chat relay.

Endpoints:
    - GET /health: Liveness check used for the Ready/Offline badge
    - POST /api/chat: Complete reply as JSON
    - POST /api/chat/stream: Reply streamed as plain text
"""

from chat_relay.api.app import app, create_app

__all__ = ["app", "create_app"]
