"""Unit tests for MessageRepository on a real SQLite file."""

import asyncio
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest
import pytest_check as check
from sqlalchemy import event
from sqlalchemy.exc import OperationalError

from src.models.schemas import MessageKind
from src.store import db as store_db
from src.store.db import StoreConfig, create_db_engine
from src.store.errors import MessageNotFoundError, StorePersistError
from src.store.models import ChatRecord
from src.store.repository import LocalMessageStore, MessageRepository


class TestInsert:
    def test_assigns_id_and_timestamp(self, repository: MessageRepository) -> None:
        message = repository.insert(MessageKind.QUESTION, "2+2?")

        check.is_not_none(message.id)
        check.equal(message.kind, MessageKind.QUESTION)
        check.equal(message.content, "2+2?")
        check.is_instance(message.created_at, datetime)

    def test_ids_are_unique(self, repository: MessageRepository) -> None:
        ids = {repository.insert(MessageKind.ANSWER, f"answer {i}").id for i in range(5)}

        assert len(ids) == 5

    def test_database_error_becomes_store_error(self, repository: MessageRepository) -> None:
        with (
            patch.object(
                store_db.Session, "commit", side_effect=OperationalError("INSERT", {}, Exception())
            ),
            pytest.raises(StorePersistError, match="Error saving chat"),
        ):
            repository.insert(MessageKind.QUESTION, "lost")


class TestListAll:
    def test_empty_store(self, repository: MessageRepository) -> None:
        assert repository.list_all() == []

    def test_ordered_by_creation_time(self, repository: MessageRepository) -> None:
        """Rows come back by created_at even when inserted out of order."""
        base = datetime(2025, 1, 1, 12, tzinfo=UTC)
        with store_db.get_session(repository._engine) as session:
            session.add(ChatRecord(kind="answer", content="third", created_at=base + timedelta(2)))
            session.add(ChatRecord(kind="question", content="first", created_at=base))
            session.add(ChatRecord(kind="answer", content="second", created_at=base + timedelta(1)))
            session.commit()

        assert [m.content for m in repository.list_all()] == ["first", "second", "third"]

    def test_same_timestamp_keeps_insertion_order(self, repository: MessageRepository) -> None:
        stamp = datetime(2025, 1, 1, 12, tzinfo=UTC)
        with store_db.get_session(repository._engine) as session:
            for content in ("a", "b", "c"):
                session.add(ChatRecord(kind="question", content=content, created_at=stamp))
                session.commit()

        assert [m.content for m in repository.list_all()] == ["a", "b", "c"]

    def test_reflects_all_inserts(self, repository: MessageRepository) -> None:
        repository.insert(MessageKind.QUESTION, "2+2?")
        repository.insert(MessageKind.ANSWER, "4")

        messages = repository.list_all()

        check.equal(
            [(m.kind, m.content) for m in messages],
            [(MessageKind.QUESTION, "2+2?"), (MessageKind.ANSWER, "4")],
        )


class TestDelete:
    def test_delete_by_id_removes_only_that_message(self, repository: MessageRepository) -> None:
        first = repository.insert(MessageKind.QUESTION, "keep")
        second = repository.insert(MessageKind.ANSWER, "drop")
        third = repository.insert(MessageKind.QUESTION, "keep too")

        repository.delete_by_id(second.id)

        assert [m.id for m in repository.list_all()] == [first.id, third.id]

    def test_delete_unknown_id_raises_not_found(self, repository: MessageRepository) -> None:
        repository.insert(MessageKind.QUESTION, "keep")

        with pytest.raises(MessageNotFoundError) as exc_info:
            repository.delete_by_id(12345)

        check.equal(exc_info.value.message_id, 12345)
        check.equal(len(repository.list_all()), 1)

    def test_delete_all_returns_count(self, repository: MessageRepository) -> None:
        for i in range(3):
            repository.insert(MessageKind.QUESTION, f"q{i}")

        check.equal(repository.delete_all(), 3)
        check.equal(repository.list_all(), [])

    def test_delete_all_on_empty_store(self, repository: MessageRepository) -> None:
        assert repository.delete_all() == 0

    def test_delete_all_issues_one_statement(self, repository: MessageRepository) -> None:
        """Rows are removed by a single DELETE, not loaded and deleted one by one."""
        for i in range(4):
            repository.insert(MessageKind.QUESTION if i % 2 else MessageKind.ANSWER, f"m{i}")
        statements: list[str] = []

        def record(conn, cursor, statement, parameters, context, executemany) -> None:
            statements.append(statement)

        event.listen(repository._engine, "before_cursor_execute", record)
        try:
            deleted = repository.delete_all()
        finally:
            event.remove(repository._engine, "before_cursor_execute", record)

        check.equal(deleted, 4)
        check.equal(statements, ["DELETE FROM chats"])

    def test_insert_after_delete_all(self, repository: MessageRepository) -> None:
        repository.insert(MessageKind.QUESTION, "old")
        repository.delete_all()

        message = repository.insert(MessageKind.QUESTION, "new")

        assert [m.id for m in repository.list_all()] == [message.id]


class TestCreateDbEngine:
    def test_creates_parent_directory(self, tmp_path) -> None:
        db_path = tmp_path / "nested" / "dir" / "chat.db"

        MessageRepository(create_db_engine(StoreConfig(database_url=f"sqlite:///{db_path}")))

        assert db_path.parent.is_dir()

    def test_in_memory_database_is_shared(self) -> None:
        repository = MessageRepository(create_db_engine(StoreConfig(database_url="sqlite://")))

        repository.insert(MessageKind.QUESTION, "in memory")

        assert [m.content for m in repository.list_all()] == ["in memory"]


class TestLocalMessageStore:
    async def test_async_facade_round_trip(self, repository: MessageRepository) -> None:
        store = LocalMessageStore(repository)

        created = await store.insert(MessageKind.QUESTION, "hi")
        listed = await store.list_all()
        await store.delete_by_id(created.id)

        check.equal([m.id for m in listed], [created.id])
        check.equal(await store.delete_all(), 0)

    async def test_concurrent_inserts_all_land(self, repository: MessageRepository) -> None:
        store = LocalMessageStore(repository)

        await asyncio.gather(*(store.insert(MessageKind.QUESTION, f"q{i}") for i in range(5)))

        messages = await store.list_all()
        check.equal(len(messages), 5)
        check.equal(
            [m.created_at for m in messages], sorted(m.created_at for m in messages)
        )
