from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MessageKind(str, Enum):
    """Who produced a message."""

    QUESTION = "question"
    ANSWER = "answer"


class ChatMessage(BaseModel):
    """A question or answer as seen by callers of the store.

    Attributes:
        id: Store-assigned identifier. None until the message is persisted.
        kind: Question or answer.
        content: The message text.
        created_at: Creation timestamp (UTC).
    """

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    kind: MessageKind
    content: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def persisted(self) -> bool:
        return self.id is not None


class MessageCreate(BaseModel):
    """Request payload for appending one message.

    Attributes:
        kind: Question or answer.
        content: Non-empty message text.
    """

    kind: MessageKind
    content: str = Field(..., min_length=1)


class DeleteResponse(BaseModel):
    """Confirmation returned by delete endpoints."""

    message: str
    deleted: int | None = None


class TurnRequest(BaseModel):
    """Request payload for a server-side chat turn.

    Blank messages are accepted by the schema and rejected by the
    orchestrator, so the endpoint can answer with a 400.
    """

    message: str

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class TurnResponse(BaseModel):
    """Result of one chat turn.

    Attributes:
        question: The submitted question.
        answer: The generated answer, or the fallback apology.
        completion_failed: Whether the answer is the fallback.
    """

    question: ChatMessage
    answer: ChatMessage
    completion_failed: bool = False
