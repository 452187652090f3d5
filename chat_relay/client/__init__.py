"""Transport client for consuming relay replies incrementally.

Responsibilities:
    - Posting the conversation history and system prompt
    - Decoding the byte stream safely across chunk boundaries
    - Delivering ordered text deltas to the rendering layer
    - Cooperative cancellation that keeps partial text
"""

from chat_relay.client.conversation import GREETING, Conversation
from chat_relay.client.decoder import IncrementalTextDecoder
from chat_relay.client.transport import APOLOGY, StreamSession, TransportClient

__all__ = [
    "APOLOGY",
    "GREETING",
    "Conversation",
    "IncrementalTextDecoder",
    "StreamSession",
    "TransportClient",
]
