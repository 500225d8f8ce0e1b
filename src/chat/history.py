"""History listing and deletion.

Thin delegation to the message store that keeps the cached history in
ChatState in step. Store errors propagate to the caller.
"""

import logging

from src.chat.ports import MessageStore
from src.chat.state import ChatEvent, ChatState
from src.models.schemas import ChatMessage

logger = logging.getLogger(__name__)


class HistoryService:
    def __init__(self, store: MessageStore, state: ChatState) -> None:
        self._store = store
        self._state = state

    async def list_history(self) -> list[ChatMessage]:
        """Load all persisted messages, oldest first, into the cached history."""
        messages = await self._store.list_all()
        self._state.history = list(messages)
        self._state.emit(ChatEvent.HISTORY_LOADED, messages)
        return messages

    async def delete_message(self, message_id: int) -> None:
        """Delete one message and drop it from the cached history.

        Raises:
            MessageNotFoundError: If the store has no message with this id.
            StorePersistError: If the delete fails.
        """
        await self._store.delete_by_id(message_id)
        self._state.history = [m for m in self._state.history if m.id != message_id]
        logger.info(f"Deleted message {message_id}")
        self._state.emit(ChatEvent.MESSAGE_DELETED, message_id)

    async def clear_history(self) -> int:
        """Delete every persisted message and empty the cached history."""
        deleted = await self._store.delete_all()
        self._state.history = []
        logger.info(f"Cleared history ({deleted} messages)")
        self._state.emit(ChatEvent.HISTORY_CLEARED, deleted)
        return deleted
