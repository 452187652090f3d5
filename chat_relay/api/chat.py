"""Chat endpoints returning complete or streamed replies.

``POST /api/chat`` answers with the whole reply as JSON. ``POST /api/chat/stream``
forwards model output as plain text chunks while it is generated.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, StreamingResponse

from chat_relay.errors import GENERIC_ERROR_MESSAGE, RelayError
from chat_relay.models.schemas import ChatRequest, ChatResponse, ErrorResponse
from chat_relay.relay.service import RelayService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

STREAM_MEDIA_TYPE = "text/plain; charset=utf-8"

# Appended when the upstream fails after the 200 response has started
STREAM_ERROR_MARKER = f"\n\n[{GENERIC_ERROR_MESSAGE}]"


def get_relay_service(request: Request) -> RelayService:
    """Return the relay service attached to the application."""
    return request.app.state.relay_service


def _error_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=GENERIC_ERROR_MESSAGE).model_dump(),
    )


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={500: {"model": ErrorResponse}},
)
async def chat(
    payload: ChatRequest,
    relay_service: RelayService = Depends(get_relay_service),
) -> ChatResponse | JSONResponse:
    """Generate the complete assistant reply for a conversation.

    Returns:
        ChatResponse with the model's text, or a generic 500 error body.
    """
    try:
        text = await relay_service.relay(payload.system, payload.messages)
    except RelayError:
        return _error_response()
    return ChatResponse(text=text)


async def _forward_stream(first: str, rest: AsyncGenerator[str]) -> AsyncGenerator[str]:
    """Yield the prefetched delta, then the remaining upstream deltas."""
    if first:
        yield first
    try:
        async for delta in rest:
            yield delta
    except RelayError:
        # Already logged by the relay; the status line is committed
        yield STREAM_ERROR_MARKER


@router.post(
    "/chat/stream",
    response_model=None,
    responses={
        200: {"content": {"text/plain": {}}},
        500: {"model": ErrorResponse},
    },
)
async def chat_stream(
    payload: ChatRequest,
    relay_service: RelayService = Depends(get_relay_service),
) -> StreamingResponse | JSONResponse:
    """Stream the assistant reply as plain text.

    The first delta is pulled before the response starts so that failures
    before any output still produce a 500 with the generic error body.
    """
    deltas = relay_service.stream(payload.system, payload.messages)
    try:
        first = await anext(deltas)
    except StopAsyncIteration:
        first = ""
    except RelayError:
        return _error_response()

    logger.debug(f"Streaming reply for {len(payload.messages)} turns")
    return StreamingResponse(_forward_stream(first, deltas), media_type=STREAM_MEDIA_TYPE)
