"""Unit tests for individual components in isolation.

Coverage:
    - config: Settings defaults and validation
    - relay: Input flattening and upstream error mapping
    - client: Decoder, conversation and transport behavior

Uses mocks for the upstream model and in-memory httpx transports.
"""
