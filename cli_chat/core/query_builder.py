"""Query Builder — parameterized statements from structured field/value maps.

Invariants:
    - Caller-supplied values are always bound parameters, never rendered into SQL text
    - Tables and columns are resolved from the metadata; unknown names raise BuildError
    - BuiltQuery.args is ordered to match the placeholders in BuiltQuery.sql
    - update/delete refuse an empty predicate (no unfiltered writes)

Design Decisions:
    - SQLAlchemy Core constructs over string templates: quoting and binding come from the dialect
    - Builder bound to one dialect, like a placeholder format: sql/args render the
      statement exactly as the driver will receive it
"""

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from sqlalchemy import Column, MetaData, Table, and_, delete, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Dialect
from sqlalchemy.sql import Executable

from cli_chat.core.errors import BuildError

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


@dataclass(frozen=True)
class BuiltQuery:
    """Executable statement plus its rendered text and positional arguments."""
    statement: Executable
    sql: str
    args: tuple[Any, ...]


class QueryBuilder:
    """Builds select/insert/update/delete statements for one dialect."""

    def __init__(self, metadata: MetaData, dialect: Dialect):
        self._metadata = metadata
        self._dialect = dialect

    @property
    def dialect_name(self) -> str:
        return self._dialect.name

    # ─── Statement shapes ────────────────────────────────────────

    def select(
        self,
        table: str,
        columns: Sequence[str],
        where: Mapping[str, Any] | None = None,
        order_by: Sequence[str] = (),
    ) -> BuiltQuery:
        """SELECT columns FROM table WHERE col = value [AND ...] [ORDER BY ...]."""
        t = self._table(table)
        if not columns:
            raise BuildError(f"select from {table!r} needs at least one column")
        stmt = select(*self._columns(t, columns))
        if where:
            stmt = stmt.where(self._predicate(t, where))
        if order_by:
            stmt = stmt.order_by(*self._columns(t, order_by))
        return self._finish(stmt)

    def insert(
        self,
        table: str,
        values: Mapping[str, Any],
        returning: str | None = None,
        on_conflict_do_nothing: bool = False,
    ) -> BuiltQuery:
        """INSERT INTO table (...) VALUES (...) [ON CONFLICT DO NOTHING] [RETURNING col]."""
        t = self._table(table)
        if not values:
            raise BuildError(f"insert into {table!r} needs at least one column")
        self._columns(t, list(values))
        if on_conflict_do_nothing:
            upsert = _UPSERT_INSERTS.get(self._dialect.name)
            if upsert is None:
                raise BuildError(
                    f"dialect {self._dialect.name!r} cannot absorb insert conflicts",
                )
            stmt = upsert(t).values(dict(values)).on_conflict_do_nothing()
        else:
            stmt = insert(t).values(dict(values))
        if returning is not None:
            stmt = stmt.returning(self._column(t, returning))
        return self._finish(stmt)

    def update(
        self, table: str, values: Mapping[str, Any], where: Mapping[str, Any],
    ) -> BuiltQuery:
        """UPDATE table SET col = value, ... WHERE col = value [AND ...]."""
        t = self._table(table)
        if not values:
            raise BuildError(f"update of {table!r} needs at least one column to set")
        if not where:
            raise BuildError(f"update of {table!r} needs a predicate")
        self._columns(t, list(values))
        stmt = update(t).values(dict(values)).where(self._predicate(t, where))
        return self._finish(stmt)

    def delete(self, table: str, where: Mapping[str, Any]) -> BuiltQuery:
        """DELETE FROM table WHERE col = value [AND ...]."""
        t = self._table(table)
        if not where:
            raise BuildError(f"delete from {table!r} needs a predicate")
        stmt = delete(t).where(self._predicate(t, where))
        return self._finish(stmt)

    # ─── Helpers ─────────────────────────────────────────────────

    def _table(self, name: str) -> Table:
        try:
            return self._metadata.tables[name]
        except KeyError:
            raise BuildError(f"unknown table {name!r}") from None

    def _column(self, table: Table, name: str) -> Column:
        try:
            return table.c[name]
        except KeyError:
            raise BuildError(f"unknown column {table.name}.{name}") from None

    def _columns(self, table: Table, names: Sequence[str]) -> list[Column]:
        return [self._column(table, n) for n in names]

    def _predicate(self, table: Table, where: Mapping[str, Any]):
        return and_(*(self._column(table, k) == v for k, v in where.items()))

    def _finish(self, stmt) -> BuiltQuery:
        compiled = stmt.compile(dialect=self._dialect)
        params = compiled.params
        order = compiled.positiontup if compiled.positional else list(params)
        return BuiltQuery(
            statement=stmt,
            sql=str(compiled),
            args=tuple(params[name] for name in order),
        )
