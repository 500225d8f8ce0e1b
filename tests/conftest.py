"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - repository: MessageRepository on a throwaway SQLite file
    - fake_store: In-memory async MessageStore with failure switches
    - fake_completion: Completion service returning a canned answer
    - chat_state: Fresh ChatState
    - async_client: HTTPX client for API testing with dependencies overridden
"""

from collections.abc import AsyncGenerator, Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from src.api import app
from src.chat.state import ChatState
from src.completion.client import NetworkFailureError, get_deferred_completion_client
from src.models.schemas import ChatMessage, MessageKind
from src.store.db import StoreConfig, create_db_engine
from src.store.errors import MessageNotFoundError, StorePersistError
from src.store.repository import MessageRepository, get_message_repository


class FakeMessageStore:
    """In-memory MessageStore.

    Set fail_inserts / fail_reads to simulate an unavailable store.
    """

    def __init__(self) -> None:
        self.messages: list[ChatMessage] = []
        self.insert_calls: list[tuple[MessageKind, str]] = []
        self.fail_inserts = False
        self.fail_reads = False
        self._next_id = 1
        self._clock = datetime(2025, 1, 1, tzinfo=UTC)

    @property
    def call_count(self) -> int:
        return len(self.insert_calls)

    async def insert(self, kind: MessageKind, content: str) -> ChatMessage:
        self.insert_calls.append((kind, content))
        if self.fail_inserts:
            raise StorePersistError("Error saving chat")
        self._clock += timedelta(seconds=1)
        message = ChatMessage(id=self._next_id, kind=kind, content=content, created_at=self._clock)
        self._next_id += 1
        self.messages.append(message)
        return message

    async def list_all(self) -> list[ChatMessage]:
        if self.fail_reads:
            raise StorePersistError("Error fetching chats")
        return sorted(self.messages, key=lambda m: (m.created_at, m.id))

    async def delete_by_id(self, message_id: int) -> None:
        if self.fail_reads:
            raise StorePersistError("database is locked")
        remaining = [m for m in self.messages if m.id != message_id]
        if len(remaining) == len(self.messages):
            raise MessageNotFoundError(message_id)
        self.messages = remaining

    async def delete_all(self) -> int:
        if self.fail_reads:
            raise StorePersistError("database is locked")
        deleted = len(self.messages)
        self.messages = []
        return deleted


class FakeCompletion:
    """Completion service returning a fixed answer, or raising a fixed error."""

    def __init__(self, response: str = "Fake answer", error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response

    def fail_with(self, error: Exception | None = None) -> None:
        self.error = error or NetworkFailureError("Connection failed: boom")


@pytest.fixture
def repository(tmp_path: Path) -> MessageRepository:
    """Repository on a fresh SQLite file under tmp_path."""
    config = StoreConfig(database_url=f"sqlite:///{tmp_path / 'chat.db'}")
    return MessageRepository(create_db_engine(config))


@pytest.fixture
def fake_store() -> FakeMessageStore:
    return FakeMessageStore()


@pytest.fixture
def fake_completion() -> FakeCompletion:
    return FakeCompletion()


@pytest.fixture
def chat_state() -> ChatState:
    return ChatState()


@pytest.fixture
def override_dependencies(
    repository: MessageRepository, fake_completion: FakeCompletion
) -> Iterator[None]:
    """Point the API at the test repository and the fake completion service."""
    app.dependency_overrides[get_message_repository] = lambda: repository
    app.dependency_overrides[get_deferred_completion_client] = lambda: fake_completion
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(override_dependencies: None) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
