"""Server-side chat turn endpoint.

Runs the same turn orchestration the UI runs, against the local
repository, for clients that cannot call the completion API themselves.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.chat.orchestrator import EmptyInputError, TurnOrchestrator
from src.chat.ports import CompletionService
from src.chat.state import ChatState
from src.completion.client import get_deferred_completion_client
from src.models.schemas import TurnRequest, TurnResponse
from src.store.repository import LocalMessageStore, MessageRepository, get_message_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/turns", tags=["turns"])


@router.post("", response_model=TurnResponse)
async def submit_turn(
    request: TurnRequest,
    repository: Annotated[MessageRepository, Depends(get_message_repository)],
    completion: Annotated[CompletionService, Depends(get_deferred_completion_client)],
) -> TurnResponse:
    """Ask a question and persist the question/answer pair.

    Completion failures, including a missing API key, still return 200
    with the fallback answer and completion_failed set.

    Raises:
        400: Blank message.
    """
    orchestrator = TurnOrchestrator(LocalMessageStore(repository), completion, ChatState())

    try:
        result = await orchestrator.submit_turn(request.message)
    except EmptyInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    if not (result.question_persisted and result.answer_persisted):
        logger.warning("Turn completed without persisting both messages")

    return TurnResponse(
        question=result.question,
        answer=result.answer,
        completion_failed=result.completion_failed,
    )
