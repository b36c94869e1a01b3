"""Root conftest — shared test configuration and the in-memory backing store.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - The schema comes from Base.metadata, the same tables the QueryBuilder resolves

Design Decisions:
    - SQLite in-memory via aiosqlite stands in for PostgreSQL: ON CONFLICT DO NOTHING
      and RETURNING behave the same for the statements the services issue
"""

import os

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

# Ensure tests never reach a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import cli_chat.models  # noqa: F401,E402
from cli_chat.db.base import Base  # noqa: E402


def _enable_foreign_keys(dbapi_connection, _record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session
