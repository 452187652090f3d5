"""Chat Relay - web chat client and streaming relay for an upstream LLM.

Combines FastAPI for HTTP streaming, Agno for model invocation,
NiceGUI for visualization, and Pydantic for data validation.

Components:
    - api: HTTP endpoints for health, complete and streamed replies
    - relay: Conversation flattening and upstream model invocation
    - client: Streaming transport with incremental decoding and cancellation
    - ui: Web interface for chat interactions
    - models: Request/response schemas
"""

__version__ = "0.1.0"
