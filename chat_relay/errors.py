"""Error taxonomy shared by the relay service and the transport client."""

GENERIC_ERROR_MESSAGE = "Failed to generate response."


class ChatRelayError(Exception):
    """Base class for chat relay errors."""


class ConfigError(ChatRelayError):
    """Raised when required configuration (e.g. the API key) is missing."""


class UpstreamError(ChatRelayError):
    """Raised when the upstream model run reports a failure."""


class RelayError(ChatRelayError):
    """Opaque failure surfaced to clients.

    Always carries the generic message; upstream detail stays in the
    server log via the exception chain.
    """

    def __init__(self) -> None:
        super().__init__(GENERIC_ERROR_MESSAGE)


class NetworkError(ChatRelayError):
    """Raised when the transport client cannot reach or read the relay."""
