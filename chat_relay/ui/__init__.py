"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Message list rendering with streamed assistant replies
    - Ready/Offline badge driven by the relay health check
    - Send, Stop and Reset controls

Contains minimal business logic. Delegates all request handling to the
transport client.
"""
