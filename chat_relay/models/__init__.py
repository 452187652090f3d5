"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Turn: Individual message in a conversation
    - ChatRequest: Incoming conversation and system prompt
    - ChatResponse: Complete assistant reply
    - ErrorResponse: Generic failure body
    - HealthResponse: Liveness payload
"""

from chat_relay.models.schemas import (
    DEFAULT_SYSTEM_PROMPT,
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HealthResponse,
    Role,
    Turn,
)

__all__ = [
    "DEFAULT_SYSTEM_PROMPT",
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthResponse",
    "Role",
    "Turn",
]
