"""Ports consumed by the turn orchestrator and the history service."""

from typing import Protocol

from src.models.schemas import ChatMessage, MessageKind


class MessageStore(Protocol):
    """Async store access. Implemented in-process and over HTTP."""

    async def insert(self, kind: MessageKind, content: str) -> ChatMessage:
        """Persist one message and return it with id and timestamp."""
        ...

    async def list_all(self) -> list[ChatMessage]:
        """All messages, oldest first."""
        ...

    async def delete_by_id(self, message_id: int) -> None:
        """Delete one message. Raises MessageNotFoundError if absent."""
        ...

    async def delete_all(self) -> int:
        """Delete every message. Returns the count removed."""
        ...


class CompletionService(Protocol):
    """Single-call text completion."""

    async def complete(self, prompt: str) -> str:
        """Return generated text or raise CompletionError."""
        ...
