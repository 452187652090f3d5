"""Relay service forwarding conversations to the upstream model via Agno.

The service flattens the turn history into a single text block and sends it,
together with the system prompt as the instruction channel, to an OpenAI
Responses model.

Every call builds its own Agent from the immutable settings, so concurrent
requests never share run state. Upstream failures are logged with full
detail and re-raised as an opaque RelayError.
"""

import logging
from collections.abc import AsyncGenerator, Iterable

from agno.agent import Agent
from agno.models.openai import OpenAIResponses

from chat_relay.config import Settings
from chat_relay.errors import ConfigError, RelayError, UpstreamError
from chat_relay.models.schemas import Role, Turn

logger = logging.getLogger(__name__)

# Agno run event / status values
_CONTENT_EVENT = "RunContent"
_ERROR_EVENT = "RunError"
_ERROR_STATUS = "ERROR"


def render_turn(turn: Turn) -> str:
    """Render one turn as ``ROLE: content``."""
    role = turn.role if isinstance(turn.role, Role) else Role.USER
    return f"{role.value.upper()}: {turn.content.strip()}"


def build_input(turns: Iterable[Turn]) -> str:
    """Flatten the turn history into the model's single-string input.

    Args:
        turns: Conversation turns, oldest first.

    Returns:
        Newline-joined ``ROLE: content`` lines in original order.
    """
    return "\n".join(render_turn(turn) for turn in turns)


class RelayService:
    """Service relaying a conversation to the upstream model.

    Wraps Agno's Agent with:
    - Per-request agent construction (no shared mutable state)
    - Complete and streaming reply interfaces
    - Centralized error handling and logging
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize the relay service.

        Args:
            settings: Immutable configuration constructed at startup.
        """
        self._settings = settings

    @property
    def model_name(self) -> str:
        return self._settings.openai_model

    def _create_agent(self, instructions: str) -> Agent:
        """Create a single-use Agno agent for one request.

        Raises:
            ConfigError: If no API key is configured.
        """
        if not self._settings.has_api_key:
            raise ConfigError("OPENAI_API_KEY is not set")

        model = OpenAIResponses(
            id=self._settings.openai_model,
            api_key=self._settings.openai_api_key,
        )
        return Agent(model=model, instructions=instructions or None)

    async def relay(self, system_prompt: str, turns: list[Turn]) -> str:
        """Get the complete reply for a conversation.

        Args:
            system_prompt: Instruction for the model.
            turns: Conversation history, oldest first.

        Returns:
            The model's output text, unmodified.

        Raises:
            RelayError: If the upstream call fails for any reason.
        """
        text = build_input(turns)
        try:
            agent = self._create_agent(system_prompt.strip())
            response = await agent.arun(text)
            if getattr(response, "status", None) == _ERROR_STATUS:
                raise UpstreamError(str(response.content))
            return response.content or ""

        except Exception as e:
            logger.exception(
                f"Upstream call failed (model={self.model_name}, turns={len(turns)})"
            )
            raise RelayError() from e

    async def stream(self, system_prompt: str, turns: list[Turn]) -> AsyncGenerator[str]:
        """Stream reply deltas for a conversation.

        Deltas are yielded in arrival order as soon as the upstream emits them.

        Args:
            system_prompt: Instruction for the model.
            turns: Conversation history, oldest first.

        Yields:
            Reply text fragments.

        Raises:
            RelayError: If the upstream call fails before or during streaming.
        """
        text = build_input(turns)
        try:
            agent = self._create_agent(system_prompt.strip())
            response_stream = agent.arun(text, stream=True)

            async for chunk in response_stream:
                event = getattr(chunk, "event", _CONTENT_EVENT)
                if event == _ERROR_EVENT:
                    raise UpstreamError(str(getattr(chunk, "content", "")))
                if event == _CONTENT_EVENT and isinstance(chunk.content, str) and chunk.content:
                    yield chunk.content

        except Exception as e:
            logger.exception(
                f"Upstream stream failed (model={self.model_name}, turns={len(turns)})"
            )
            raise RelayError() from e
