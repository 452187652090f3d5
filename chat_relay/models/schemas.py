from enum import Enum

from pydantic import BaseModel, Field, field_validator

DEFAULT_SYSTEM_PROMPT = "You are a helpful, concise AI assistant."


class Role(str, Enum):
    """Speaker of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class Turn(BaseModel):
    """A single message in the conversation.

    Attributes:
        role: The speaker; missing or unrecognized roles become ``user``.
        content: The message text.
    """

    role: Role = Role.USER
    content: str

    @field_validator("role", mode="before")
    @classmethod
    def default_role(cls, v: object) -> Role:
        """Coerce missing or unknown roles to the default speaker."""
        if isinstance(v, Role):
            return v
        if isinstance(v, str):
            try:
                return Role(v.lower())
            except ValueError:
                pass
        return Role.USER


class ChatRequest(BaseModel):
    """Request payload for the chat endpoints.

    Attributes:
        system: Instruction for the model, sent separately from the turns.
        messages: Ordered conversation history, oldest first.
    """

    system: str = DEFAULT_SYSTEM_PROMPT
    messages: list[Turn] = Field(default_factory=list)


class ChatResponse(BaseModel):
    """Complete reply from the model."""

    text: str


class ErrorResponse(BaseModel):
    """Opaque failure body returned with a 500 status."""

    error: str


class HealthResponse(BaseModel):
    """Liveness payload."""

    ok: bool = True
