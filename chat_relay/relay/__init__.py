"""Agno-backed relay to the upstream language model.

Responsibilities:
    - Flattening the turn history into a single text input
    - Passing the system prompt through the instruction channel
    - Complete and streamed reply generation
    - Mapping every upstream failure to an opaque RelayError

Maintains clean separation from the HTTP layer.
"""

from chat_relay.relay.service import RelayService, build_input

__all__ = ["RelayService", "build_input"]
