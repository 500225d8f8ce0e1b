"""HTTP client for the /api/chats resource.

Implements the MessageStore port so the UI runs turns and history
operations through the API rather than touching the database.
"""

import logging
import os
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from src.models.schemas import ChatMessage, MessageKind
from src.store.errors import MessageNotFoundError, StorePersistError

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

CHATS_PATH = "/api/chats"

T = TypeVar("T")


class ChatApiClient:
    """Async MessageStore backed by the chat REST API."""

    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url or API_BASE_URL
        self._transport = transport
        self._timeout = timeout

    async def insert(self, kind: MessageKind, content: str) -> ChatMessage:
        response = await self._send(
            "POST", CHATS_PATH, json={"kind": MessageKind(kind).value, "content": content}
        )
        _raise_for_status(response)
        return _decode(response, ChatMessage.model_validate)

    async def list_all(self) -> list[ChatMessage]:
        response = await self._send("GET", CHATS_PATH)
        _raise_for_status(response)
        return _decode(response, lambda body: [ChatMessage.model_validate(item) for item in body])

    async def delete_by_id(self, message_id: int) -> None:
        response = await self._send("DELETE", f"{CHATS_PATH}/{message_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            raise MessageNotFoundError(message_id)
        _raise_for_status(response)

    async def delete_all(self) -> int:
        response = await self._send("DELETE", CHATS_PATH)
        _raise_for_status(response)
        return _decode(response, lambda body: body.get("deleted") or 0)

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                transport=self._transport,
                timeout=self._timeout,
            ) as client:
                return await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise StorePersistError(f"Connection failed: {e}") from e


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        detail = response.json().get("detail", response.text)
    except ValueError:
        detail = response.text
    logger.error(f"Chat API returned HTTP {response.status_code}: {detail}")
    raise StorePersistError(f"HTTP {response.status_code}: {detail}")


def _decode(response: httpx.Response, parse: Callable[[Any], T]) -> T:
    """Parse a success body, treating malformed JSON or shape as a store failure."""
    try:
        return parse(response.json())
    except (ValueError, TypeError, AttributeError) as e:
        logger.error(f"Chat API returned an unusable body: {e}")
        raise StorePersistError(f"Invalid response from chat API: {e}") from e
