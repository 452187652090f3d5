"""Integration tests for components working together as a system.

Coverage:
    - API endpoints through httpx ASGITransport
    - Transport client streaming against the real FastAPI app

The upstream model is scripted; no network access or API key is required.
"""
