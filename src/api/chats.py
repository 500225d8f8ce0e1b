"""Chat message resource: list, append, delete one, delete all.

Routes are synchronous; FastAPI runs them in its threadpool so the
blocking repository calls stay off the event loop.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.models.schemas import ChatMessage, DeleteResponse, MessageCreate
from src.store.errors import MessageNotFoundError, StorePersistError
from src.store.repository import MessageRepository, get_message_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chats", tags=["chats"])

Repository = Annotated[MessageRepository, Depends(get_message_repository)]


@router.get("", response_model=list[ChatMessage])
def list_chats(repository: Repository) -> list[ChatMessage]:
    """Return every stored message, oldest first.

    Raises:
        500: Store read failure.
    """
    try:
        return repository.list_all()
    except StorePersistError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching chats",
        ) from e


@router.post("", response_model=ChatMessage, status_code=status.HTTP_201_CREATED)
def create_chat(payload: MessageCreate, repository: Repository) -> ChatMessage:
    """Append one question or answer.

    Returns:
        The stored message with its id and creation timestamp.

    Raises:
        422: Missing kind, unknown kind, or empty content.
        500: Store write failure.
    """
    try:
        return repository.insert(payload.kind, payload.content)
    except StorePersistError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error saving chat",
        ) from e


@router.delete("/{message_id}", response_model=DeleteResponse)
def delete_chat(message_id: int, repository: Repository) -> DeleteResponse:
    """Delete one message by id.

    Raises:
        404: No message with this id.
        500: Store failure.
    """
    try:
        repository.delete_by_id(message_id)
    except MessageNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Chat not found",
        ) from e
    except StorePersistError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e

    return DeleteResponse(message="Chat deleted")


@router.delete("", response_model=DeleteResponse)
def delete_all_chats(repository: Repository) -> DeleteResponse:
    """Delete every message."""
    try:
        deleted = repository.delete_all()
    except StorePersistError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e

    logger.info(f"Deleted all chats ({deleted} messages)")
    return DeleteResponse(message="All chats deleted", deleted=deleted)
