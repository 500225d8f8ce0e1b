"""Integration tests for components working together as a system.

Coverage:
    - /api/chats and /api/turns through the real FastAPI app
    - ChatApiClient driving the orchestrator and history service over HTTP

Persistence uses a real SQLite file per test; the completion service is faked.
"""
