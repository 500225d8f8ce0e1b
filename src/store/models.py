from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class ChatRecord(SQLModel, table=True):
    """
    Question or answer row stored in the chats table.
    """

    __tablename__ = "chats"

    id: int | None = Field(default=None, primary_key=True)
    kind: str  # "question" or "answer"
    content: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), index=True)
