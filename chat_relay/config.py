"""Relay configuration with environment variable loading.

Pydantic-based settings read once at process start and passed explicitly
into the services that need them.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL = "gpt-5"
DEFAULT_PORT = 3001


class Settings(BaseModel):
    """Immutable configuration for the relay server.

    The API key is optional here: a missing key is reported at startup and
    surfaces as a failed reply at request time, so the server still boots
    and answers health checks.

    Attributes:
        openai_api_key: API key for the upstream model (None when unset).
        openai_model: Model identifier passed to the upstream API.
        host: Interface the HTTP server binds to.
        port: Port the HTTP server listens on.
        log_level: Root logging level name.
    """

    model_config = ConfigDict(frozen=True)

    openai_api_key: str | None = Field(
        default_factory=lambda: os.getenv("OPENAI_API_KEY"),
        description="API key for the upstream model",
    )
    openai_model: str = Field(
        default_factory=lambda: os.getenv("OPENAI_MODEL") or DEFAULT_MODEL,
        min_length=1,
        description="Model to use",
    )
    host: str = Field(
        default_factory=lambda: os.getenv("HOST", "0.0.0.0"),
        description="Bind address for the HTTP server",
    )
    port: int = Field(
        default_factory=lambda: int(os.getenv("PORT") or DEFAULT_PORT),
        ge=1,
        le=65535,
        description="Listening port for the HTTP server",
    )
    log_level: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper(),
        description="Logging level name",
    )

    @field_validator("openai_api_key")
    @classmethod
    def normalize_api_key(cls, v: str | None) -> str | None:
        """Strip the API key and treat blank values as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def has_api_key(self) -> bool:
        return self.openai_api_key is not None


def get_settings() -> Settings:
    """Create settings from the environment.

    Returns:
        Configured Settings instance.
    """
    return Settings()
