"""Turn orchestration: question in, answer out, both persisted.

A turn runs strictly in sequence:

1. Show the question and notify listeners, then persist it (best effort).
2. Ask the completion service for an answer.
3. Persist the answer (best effort).
4. Add the persisted messages to the cached history and notify listeners.

Store failures inside a turn are logged and ignored. Completion failures
become FALLBACK_ANSWER instead of a failed turn, so the user always gets an
answer message. Nothing here serializes concurrent turns; the UI disables
its send button while a turn is in flight.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from src.chat.ports import CompletionService, MessageStore
from src.chat.state import ChatEvent, ChatState
from src.models.schemas import ChatMessage, MessageKind
from src.store.errors import StorePersistError

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "⚠️ Sorry, something went wrong!"


class EmptyInputError(ValueError):
    """Raised when a blank message is submitted."""

    def __init__(self) -> None:
        super().__init__("Message cannot be empty")


class TurnState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    AWAITING_COMPLETION = "awaiting_completion"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class TurnResult:
    """Outcome of one submitted turn.

    Attributes:
        question: The question as it now appears in the session view.
        answer: The answer (or fallback) as it appears in the session view.
        state: Final turn state.
        question_persisted: Whether the question reached the store.
        answer_persisted: Whether the answer reached the store.
        completion_failed: Whether the answer is the fallback string.
    """

    question: ChatMessage
    answer: ChatMessage
    state: TurnState = TurnState.DONE
    question_persisted: bool = False
    answer_persisted: bool = False
    completion_failed: bool = False


class TurnOrchestrator:
    """Runs chat turns against a message store and a completion service."""

    def __init__(
        self,
        store: MessageStore,
        completion: CompletionService,
        state: ChatState,
    ) -> None:
        self._store = store
        self._completion = completion
        self._state = state
        self.turn_state = TurnState.IDLE

    async def submit_turn(self, text: str) -> TurnResult:
        """Run one turn for a user message.

        Args:
            text: The user's message.

        Returns:
            The question/answer pair appended to the session view.

        Raises:
            EmptyInputError: If text is empty or whitespace. No side effects.
        """
        if not text or not text.strip():
            raise EmptyInputError()

        self.turn_state = TurnState.SUBMITTING
        question, question_persisted = await self._append(
            MessageKind.QUESTION, text, notify=ChatEvent.TURN_SUBMITTED
        )

        self.turn_state = TurnState.AWAITING_COMPLETION
        completion_failed = False
        try:
            answer_content = await self._completion.complete(text)
        except Exception as e:
            logger.warning(f"Completion failed, answering with fallback: {e}")
            answer_content = FALLBACK_ANSWER
            completion_failed = True

        self.turn_state = TurnState.PERSISTING
        answer, answer_persisted = await self._append(MessageKind.ANSWER, answer_content)

        self.turn_state = TurnState.DONE
        result = TurnResult(
            question=question,
            answer=answer,
            question_persisted=question_persisted,
            answer_persisted=answer_persisted,
            completion_failed=completion_failed,
        )
        self._state.history.extend(
            message for message in (question, answer) if message.persisted
        )
        self._state.emit(ChatEvent.TURN_COMPLETED, result)
        return result

    async def _append(
        self, kind: MessageKind, content: str, notify: ChatEvent | None = None
    ) -> tuple[ChatMessage, bool]:
        """Add a message to the session view, then try to persist it.

        If notify is given it is emitted once the message is visible, before
        the store is called.
        """
        pending = ChatMessage(kind=kind, content=content)
        self._state.add_to_session(pending)
        if notify is not None:
            self._state.emit(notify, pending)

        try:
            stored = await self._store.insert(kind, content)
        except StorePersistError as e:
            logger.error(f"Could not persist {kind.value}: {e}")
            return pending, False

        self._state.replace_in_session(pending, stored)
        return stored, True
