"""Query Builder — statement shapes, argument ordering, and build failures.

Tests cover:
    - select/insert/update/delete render placeholders, never caller values
    - args follow placeholder order (positional qmark dialect)
    - ON CONFLICT DO NOTHING and RETURNING rendered for postgresql and sqlite
    - malformed specifications raise BuildError
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy.dialects import mysql, postgresql, sqlite

import cli_chat.models  # noqa: F401
from cli_chat.core.errors import BuildError, InternalError
from cli_chat.core.query_builder import QueryBuilder
from cli_chat.core.row_mapper import MESSAGE_COLUMNS, USER_COLUMNS
from cli_chat.db.base import Base

HOSTILE = "x'); DROP TABLE \"user\"; --"


@pytest.fixture
def qb():
    return QueryBuilder(Base.metadata, sqlite.dialect())


@pytest.fixture
def pg():
    return QueryBuilder(Base.metadata, postgresql.dialect())


# ─── select ──────────────────────────────────────────────────────

def test_select_with_equality_filter(qb):
    q = qb.select("user", USER_COLUMNS, where={"id": 5})
    assert q.sql.startswith("SELECT")
    assert "WHERE" in q.sql
    assert q.args == (5,)
    assert q.sql.count("?") == 1


def test_select_without_filter_has_no_args(qb):
    q = qb.select("chat", ["id", "name"])
    assert "WHERE" not in q.sql
    assert q.args == ()


def test_select_order_by_columns(qb):
    q = qb.select("message", MESSAGE_COLUMNS, where={"chat_id": 3}, order_by=("sent_at", "id"))
    assert "ORDER BY message.sent_at, message.id" in q.sql
    assert q.args == (3,)


def test_select_value_never_in_sql(qb):
    q = qb.select("user", USER_COLUMNS, where={"email": HOSTILE})
    assert HOSTILE not in q.sql
    assert q.args == (HOSTILE,)


# ─── insert ──────────────────────────────────────────────────────

def test_insert_args_follow_column_order(qb):
    q = qb.insert("user", {"name": "Ada", "email": "ada@x.io", "role": 1}, returning="id")
    assert q.sql.startswith("INSERT INTO")
    assert "RETURNING" in q.sql
    assert q.args == ("Ada", "ada@x.io", 1)
    assert q.sql.count("?") == 3


def test_insert_on_conflict_do_nothing_sqlite(qb):
    q = qb.insert("chat_member", {"user_id": 1, "chat_id": 2}, on_conflict_do_nothing=True)
    assert "ON CONFLICT DO NOTHING" in q.sql
    assert q.args == (1, 2)


def test_insert_on_conflict_do_nothing_postgresql(pg):
    q = pg.insert("chat_member", {"user_id": 1, "chat_id": 2}, on_conflict_do_nothing=True)
    assert "ON CONFLICT DO NOTHING" in q.sql
    assert sorted(q.args) == [1, 2]


def test_insert_quotes_reserved_table_name_postgresql(pg):
    q = pg.insert("user", {"name": HOSTILE, "email": "e", "role": 0}, returning="id")
    assert '"user"' in q.sql
    assert "RETURNING" in q.sql
    assert HOSTILE not in q.sql
    assert HOSTILE in q.args


# ─── update ──────────────────────────────────────────────────────

def test_update_set_args_precede_filter_args(qb):
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    q = qb.update("user", {"name": "Grace", "updated_at": now}, where={"id": 7})
    assert q.sql.startswith("UPDATE")
    assert q.args == ("Grace", now, 7)


def test_update_value_never_in_sql(pg):
    q = pg.update("user", {"email": HOSTILE}, where={"id": 1})
    assert HOSTILE not in q.sql
    assert HOSTILE in q.args


# ─── delete ──────────────────────────────────────────────────────

def test_delete_with_filter(qb):
    q = qb.delete("chat", where={"id": 9})
    assert q.sql.startswith("DELETE FROM")
    assert q.args == (9,)


# ─── BuildError ──────────────────────────────────────────────────

def test_unknown_table_raises(qb):
    with pytest.raises(BuildError):
        qb.select("nope", ["id"])


def test_unknown_column_raises(qb):
    with pytest.raises(BuildError):
        qb.select("user", ["id", "password"])


def test_unknown_filter_column_raises(qb):
    with pytest.raises(BuildError):
        qb.delete("user", where={"uid": 1})


def test_unknown_returning_column_raises(qb):
    with pytest.raises(BuildError):
        qb.insert("chat", {"name": "x"}, returning="uuid")


def test_empty_select_columns_raises(qb):
    with pytest.raises(BuildError):
        qb.select("user", [])


def test_empty_insert_values_raises(qb):
    with pytest.raises(BuildError):
        qb.insert("chat", {})


def test_update_without_values_raises(qb):
    with pytest.raises(BuildError):
        qb.update("user", {}, where={"id": 1})


def test_update_without_predicate_raises(qb):
    with pytest.raises(BuildError):
        qb.update("user", {"name": "x"}, where={})


def test_delete_without_predicate_raises(qb):
    with pytest.raises(BuildError):
        qb.delete("chat", where={})


def test_conflict_absorption_unsupported_dialect_raises():
    qb = QueryBuilder(Base.metadata, mysql.dialect())
    with pytest.raises(BuildError):
        qb.insert("chat_member", {"user_id": 1, "chat_id": 1}, on_conflict_do_nothing=True)


def test_build_error_is_internal(qb):
    with pytest.raises(InternalError) as exc_info:
        qb.select("nope", ["id"])
    assert exc_info.value.to_response()["error"]["code"] == "INTERNAL"
