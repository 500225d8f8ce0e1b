"""Message repository over the chats table.

Provides the store access operations consumed by the API routes, the
turn orchestrator, and the history service.
"""

import asyncio
import logging

from sqlalchemy import delete
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from src.models.schemas import ChatMessage, MessageKind
from src.store.db import StoreConfig, create_db_engine, get_session, init_db
from src.store.errors import MessageNotFoundError, StorePersistError
from src.store.models import ChatRecord

logger = logging.getLogger(__name__)


class MessageRepository:
    """Synchronous access to persisted chat messages.

    Every write commits before returning. Storage errors are logged and
    re-raised as StorePersistError.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        init_db(engine)

    def insert(self, kind: MessageKind, content: str) -> ChatMessage:
        """Append one message and return it with its assigned id and timestamp."""
        record = ChatRecord(kind=MessageKind(kind).value, content=content)
        try:
            with get_session(self._engine) as session:
                session.add(record)
                session.commit()
                session.refresh(record)
                return _to_message(record)
        except SQLAlchemyError as e:
            logger.error(f"Failed to save {kind} message: {e}")
            raise StorePersistError("Error saving chat") from e

    def list_all(self) -> list[ChatMessage]:
        """Return every message, oldest first."""
        try:
            with get_session(self._engine) as session:
                records = session.exec(
                    select(ChatRecord).order_by(ChatRecord.created_at, ChatRecord.id)
                ).all()
                return [_to_message(record) for record in records]
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch messages: {e}")
            raise StorePersistError("Error fetching chats") from e

    def delete_by_id(self, message_id: int) -> None:
        """Delete one message.

        Raises:
            MessageNotFoundError: If no message has this id.
            StorePersistError: If the delete fails.
        """
        try:
            with get_session(self._engine) as session:
                record = session.get(ChatRecord, message_id)
                if record is None:
                    raise MessageNotFoundError(message_id)
                session.delete(record)
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete message {message_id}: {e}")
            raise StorePersistError(str(e)) from e

    def delete_all(self) -> int:
        """Delete every message and return how many were removed."""
        try:
            with get_session(self._engine) as session:
                result = session.connection().execute(delete(ChatRecord))
                session.commit()
                return result.rowcount
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete all messages: {e}")
            raise StorePersistError(str(e)) from e


class LocalMessageStore:
    """Async facade over MessageRepository for the turn orchestrator.

    Runs each repository call in a worker thread so the event loop is never
    blocked on the database.
    """

    def __init__(self, repository: MessageRepository) -> None:
        self._repository = repository

    async def insert(self, kind: MessageKind, content: str) -> ChatMessage:
        return await asyncio.to_thread(self._repository.insert, kind, content)

    async def list_all(self) -> list[ChatMessage]:
        return await asyncio.to_thread(self._repository.list_all)

    async def delete_by_id(self, message_id: int) -> None:
        await asyncio.to_thread(self._repository.delete_by_id, message_id)

    async def delete_all(self) -> int:
        return await asyncio.to_thread(self._repository.delete_all)


def _to_message(record: ChatRecord) -> ChatMessage:
    return ChatMessage.model_validate(record)


# Module-level singleton instance
_repository: MessageRepository | None = None


def get_message_repository() -> MessageRepository:
    """Get or create the global message repository.

    Returns:
        The MessageRepository bound to the configured database.
    """
    global _repository
    if _repository is None:
        config = StoreConfig()
        _repository = MessageRepository(create_db_engine(config))
        logger.info(f"Message store ready at {config.database_url}")
    return _repository
