"""
Shared fixtures for connection and executor tests.

Key fixtures:
- sqlite_engine: in-memory SQLite engine with a `users` table; SQLite accepts
  backtick identifiers and the two-argument LIMIT form the builder emits.
- sqlite_connection: DbConnection wrapping sqlite_engine.
- patch_create_engine: patches create_engine in utils.database_utils.
"""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from utils.database_utils import DbConnection


@pytest.fixture
def sqlite_engine():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE `users` ("
            "`id` INTEGER PRIMARY KEY AUTOINCREMENT, "
            "`name` TEXT NOT NULL, "
            "`age` INTEGER, "
            "`score` REAL)"
        ))
    yield engine
    engine.dispose()


@pytest.fixture
def sqlite_connection(sqlite_engine):
    return DbConnection("default", sqlite_engine)


@pytest.fixture
def patch_create_engine():
    """
    Patch create_engine and yield the mock. Each call returns a fresh
    MagicMock engine whose connect() context manager yields a MagicMock
    connection, so the initialization ping succeeds by default.
    """
    with patch("utils.database_utils.create_engine") as mock_create_engine:
        mock_create_engine.side_effect = lambda *args, **kwargs: MagicMock(name="engine")
        yield mock_create_engine
