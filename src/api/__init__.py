"""FastAPI endpoints for the chat application.

RESTful routes over the stored chat messages plus a server-side turn endpoint.

Endpoints:
    - GET /health: Service health status
    - GET /api/chats: All messages, oldest first
    - POST /api/chats: Append a question or answer
    - DELETE /api/chats/{id}: Delete one message
    - DELETE /api/chats: Delete every message
    - POST /api/turns: Ask a question and persist the question/answer pair
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
