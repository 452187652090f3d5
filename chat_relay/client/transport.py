"""Streaming transport client for the chat relay.

Posts the conversation to the relay and surfaces the assistant reply as
ordered text deltas while the response body is still arriving.

Reading happens in a single background task per request that feeds a queue.
The consumer drains the queue, so ``stop()`` can abort the request from
anywhere (a button handler, a timer) without racing the reader.
"""

import asyncio
import logging
import os
from collections.abc import AsyncGenerator, Callable

import httpx
from pydantic import ValidationError

from chat_relay.client.conversation import Conversation
from chat_relay.client.decoder import IncrementalTextDecoder
from chat_relay.errors import NetworkError
from chat_relay.models.schemas import ChatResponse, HealthResponse, Role

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", f"http://localhost:{os.getenv('PORT', '3001')}")
STREAM_PATH = "/api/chat/stream"
HEALTH_PATH = "/health"

APOLOGY = "Sorry, something went wrong."

_END = object()


class StreamSession:
    """One in-flight request and its cancellation handle."""

    def __init__(self) -> None:
        self.queue: asyncio.Queue[object] = asyncio.Queue()
        self.task: asyncio.Task[None] | None = None
        self.cancelled = False
        self.received = False
        self.error: NetworkError | None = None

    @property
    def done(self) -> bool:
        return self.task is None or self.task.done()

    def cancel(self) -> None:
        """Abort the request and drop any deltas not yet delivered."""
        if self.cancelled:
            return
        self.cancelled = True
        if not self.done:
            self.task.cancel()
        # The task may be cancelled before it ever runs its cleanup
        self.queue.put_nowait(_END)


def _is_json(response: httpx.Response) -> bool:
    return response.headers.get("content-type", "").startswith("application/json")


class TransportClient:
    """Client for the relay's chat and health endpoints.

    Attributes:
        base_url: Root URL of the relay server.
        timeout: Per-operation httpx timeout in seconds.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        *,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport
        self._session: StreamSession | None = None

    @property
    def loading(self) -> bool:
        """Whether a reply is currently streaming."""
        return self._session is not None

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def check_health(self) -> bool:
        """Return True when the relay answers ``/health`` with ``ok``."""
        try:
            async with self._client() as client:
                response = await client.get(HEALTH_PATH)
        except httpx.HTTPError as e:
            logger.warning(f"Health check failed: {e}")
            return False

        if response.status_code != httpx.codes.OK:
            return False
        try:
            return HealthResponse.model_validate_json(response.content).ok
        except ValidationError:
            return False

    async def _pump(self, session: StreamSession, payload: dict) -> None:
        """Read the response body and queue decoded deltas in arrival order."""
        try:
            async with (
                self._client() as client,
                client.stream(
                    "POST",
                    STREAM_PATH,
                    json=payload,
                    headers={"Accept": "text/plain, application/json"},
                ) as response,
            ):
                if response.status_code != httpx.codes.OK:
                    raise NetworkError(f"HTTP {response.status_code}")

                if _is_json(response):
                    body = await response.aread()
                    try:
                        reply = ChatResponse.model_validate_json(body)
                    except ValidationError as e:
                        raise NetworkError("Malformed reply payload") from e
                    session.queue.put_nowait(reply.text)
                    return

                decoder = IncrementalTextDecoder(response.charset_encoding or "utf-8")
                async for chunk in response.aiter_bytes():
                    session.received = True
                    session.queue.put_nowait(decoder.feed(chunk))
                session.queue.put_nowait(decoder.finish())

        except httpx.ReadTimeout as e:
            if not session.received:
                session.error = NetworkError(f"Timed out waiting for reply: {e}")
            else:
                logger.info("Reply stream timed out; keeping partial text")
        except httpx.HTTPError as e:
            session.error = NetworkError(f"Connection failed: {e}")
        except NetworkError as e:
            session.error = e
        finally:
            session.queue.put_nowait(_END)

    async def send(self, conversation: Conversation, system_prompt: str) -> AsyncGenerator[str]:
        """Send the conversation and yield reply deltas as they arrive.

        Appends an empty assistant placeholder to the conversation before the
        request goes out. Updating that placeholder is the caller's job; see
        ``stream_reply``.

        Args:
            conversation: History ending with the new, non-empty user turn.
            system_prompt: Instruction passed to the model.

        Yields:
            Decoded text fragments in arrival order.

        Raises:
            ValueError: If the conversation does not end with a user turn.
            RuntimeError: If another reply is already streaming.
            NetworkError: If the relay cannot be reached or answers with an error.
        """
        last = conversation.last
        if last is None or last.role != Role.USER or not last.content.strip():
            raise ValueError("Conversation must end with a non-empty user turn")
        if self._session is not None:
            raise RuntimeError("A reply is already streaming")

        payload = {"system": system_prompt, "messages": conversation.history()}
        conversation.append(Role.ASSISTANT, "")

        session = StreamSession()
        self._session = session
        session.task = asyncio.create_task(self._pump(session, payload))
        try:
            while True:
                item = await session.queue.get()
                if item is _END or session.cancelled:
                    break
                if item:
                    yield item

            if session.cancelled:
                await asyncio.wait([session.task])
                logger.info("Reply stream stopped by user")
                return
            await session.task
            if session.error is not None:
                raise session.error
        finally:
            if not session.done:
                session.task.cancel()
            self._session = None

    def stop(self) -> None:
        """Abort the in-flight reply, keeping any text already received."""
        if self._session is not None:
            self._session.cancel()

    async def stream_reply(
        self,
        conversation: Conversation,
        system_prompt: str,
        on_update: Callable[[str], None] | None = None,
    ) -> str:
        """Stream a reply into the conversation's trailing assistant turn.

        Each delta replaces the trailing turn with the cumulative text. On a
        network failure the trailing turn is replaced with a fixed apology.

        Returns:
            Final content of the trailing turn.
        """
        text = ""
        try:
            async for delta in self.send(conversation, system_prompt):
                text += delta
                conversation.replace_trailing(text)
                if on_update:
                    on_update(text)
        except NetworkError as e:
            logger.warning(f"Reply failed: {e}")
            text = APOLOGY
            conversation.replace_trailing(text)
            if on_update:
                on_update(text)
        return text
