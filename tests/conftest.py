"""Pytest fixtures and shared test configuration.

Fixtures:
    - settings: Settings with a fake API key
    - fake_run: Scripted replacement for the Agno agent run
    - app: FastAPI application built from ``settings``
    - async_client: HTTPX client for API testing
"""

from collections.abc import AsyncGenerator, Iterator
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from chat_relay.api.app import create_app
from chat_relay.config import Settings


class FakeAgentRun:
    """Scripted stand-in for ``Agent.arun``.

    Attributes:
        reply: Text returned by a complete run.
        deltas: Content events yielded by a streamed run.
        error: Exception raised by the run, if any.
        fail_at: Index of the delta before which ``error`` is raised.
        calls: Inputs the agent was run with.
    """

    def __init__(self) -> None:
        self.reply = "Hello!"
        self.deltas = ["Hel", "lo"]
        self.error: Exception | None = None
        self.fail_at = 0
        self.calls: list[str] = []
        self.agent_class: MagicMock
        self.model_class: MagicMock

    def __call__(self, text: str, stream: bool = False, **kwargs):
        self.calls.append(text)
        if stream:
            return self._stream()
        return self._complete()

    async def _complete(self):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=self.reply, status="COMPLETED")

    async def _stream(self):
        for i, delta in enumerate(self.deltas):
            if self.error is not None and i == self.fail_at:
                raise self.error
            yield SimpleNamespace(event="RunContent", content=delta)
        if self.error is not None and self.fail_at >= len(self.deltas):
            raise self.error


@pytest.fixture
def settings() -> Settings:
    """Settings with a fake API key and the default model."""
    return Settings(openai_api_key="sk-test-key", openai_model="gpt-5")


@pytest.fixture
def fake_run() -> Iterator[FakeAgentRun]:
    """Patch Agno's Agent and model classes with a scripted run."""
    run = FakeAgentRun()
    with (
        patch("chat_relay.relay.service.OpenAIResponses") as mock_model,
        patch("chat_relay.relay.service.Agent") as mock_agent,
    ):
        mock_agent.return_value.arun.side_effect = run
        run.agent_class = mock_agent
        run.model_class = mock_model
        yield run


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """FastAPI application wired to the test settings."""
    return create_app(settings)


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
