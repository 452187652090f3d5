"""Test package for Chat Relay.

Unit tests cover isolated logic; integration tests drive the FastAPI app
and the transport client together over in-process transports.

Structure:
    - unit/: Individual function and class tests
    - integration/: End-to-end request and streaming tests

Leverages pytest with pytest-asyncio and pytest-check for soft assertions.
"""
