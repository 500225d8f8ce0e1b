"""Persistent message store.

Responsibilities:
    - SQLModel table for question/answer records
    - Ordered listing, append, delete-one and delete-all operations
    - Translation of database failures into StorePersistError
"""

from src.store.errors import MessageNotFoundError, StorePersistError
from src.store.repository import LocalMessageStore, MessageRepository, get_message_repository

__all__ = [
    "LocalMessageStore",
    "MessageNotFoundError",
    "MessageRepository",
    "StorePersistError",
    "get_message_repository",
]
