"""Database configuration and engine construction.

SQLite by default; any SQLAlchemy URL works via DATABASE_URL.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

load_dotenv()


class StoreConfig(BaseModel):
    """Configuration for the message store.

    Attributes:
        database_url: SQLAlchemy database URL.
        echo: Log every SQL statement.
    """

    database_url: str = Field(
        default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///data/chat.db"),
        description="SQLAlchemy database URL",
    )
    echo: bool = Field(
        default_factory=lambda: os.getenv("DATABASE_ECHO", "").lower() in {"1", "true", "yes"},
        description="Echo SQL statements to the log",
    )


def create_db_engine(config: StoreConfig) -> Engine:
    """Create an engine for the configured database.

    For SQLite, the parent directory of the database file is created and
    connections are allowed to cross threads (FastAPI runs sync routes in a
    threadpool). In-memory SQLite uses a single shared connection.

    Args:
        config: Store configuration.

    Returns:
        A SQLAlchemy engine.
    """
    url = make_url(config.database_url)

    if url.get_backend_name() != "sqlite":
        return create_engine(config.database_url, echo=config.echo)

    if url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            config.database_url,
            echo=config.echo,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        config.database_url,
        echo=config.echo,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def init_db(engine: Engine) -> None:
    """Create all tables if they don't exist."""
    SQLModel.metadata.create_all(engine)


def get_session(engine: Engine) -> Session:
    """Provide a new SQLModel session."""
    return Session(engine)
