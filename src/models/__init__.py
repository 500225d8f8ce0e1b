"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - MessageKind: Question or answer
    - ChatMessage: A persisted (or pending) chat message
    - MessageCreate: Incoming payload for appending a message
    - DeleteResponse: Confirmation for delete operations
    - TurnRequest / TurnResponse: Server-side chat turn payloads
"""

from src.models.schemas import (
    ChatMessage,
    DeleteResponse,
    MessageCreate,
    MessageKind,
    TurnRequest,
    TurnResponse,
)

__all__ = [
    "ChatMessage",
    "DeleteResponse",
    "MessageCreate",
    "MessageKind",
    "TurnRequest",
    "TurnResponse",
]
