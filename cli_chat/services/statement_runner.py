"""Statement Runner — executes one built statement per RPC against the session.

Invariants:
    - Exactly one statement per call; writes commit immediately after it
    - Result rows are consumed before commit
    - SQLAlchemy failures roll back and surface as StoreError (never raw driver text)
    - Cancellation propagates untouched; the session context rolls back on exit
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

import cli_chat.models  # noqa: F401  (populates Base.metadata)
from cli_chat.core.errors import ErrorContext
from cli_chat.core.query_builder import BuiltQuery, QueryBuilder
from cli_chat.db.base import Base
from cli_chat.infrastructure.database import to_store_error

logger = logging.getLogger(__name__)


class StatementRunner:
    """Base for store-backed services: owns the session and the query builder."""

    def __init__(self, db: AsyncSession, builder: QueryBuilder | None = None):
        self.db = db
        self.builder = builder or QueryBuilder(
            Base.metadata, db.get_bind().dialect,
        )

    async def fetch_one(
        self, query: BuiltQuery, context: ErrorContext, commit: bool = False,
    ) -> Sequence[Any] | None:
        """First row of the result (None when there is none)."""
        async with self._guard(query, context):
            result = await self.db.execute(query.statement)
            row = result.first()
            if commit:
                await self.db.commit()
        return row

    async def fetch_all(
        self, query: BuiltQuery, context: ErrorContext,
    ) -> list[Sequence[Any]]:
        async with self._guard(query, context):
            result = await self.db.execute(query.statement)
            rows = list(result.all())
        return rows

    async def execute(self, query: BuiltQuery, context: ErrorContext) -> int:
        """Run a write and commit. Returns rows affected."""
        async with self._guard(query, context):
            result = await self.db.execute(query.statement)
            rowcount = result.rowcount
            await self.db.commit()
        return rowcount

    @asynccontextmanager
    async def _guard(self, query: BuiltQuery, context: ErrorContext):
        logger.debug(
            f"Executing {query.sql} with {len(query.args)} args",
            extra={"rpc_method": context.rpc_method},
        )
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"{context.rpc_method} failed on {context.entity}: {e}",
                extra={"rpc_method": context.rpc_method},
            )
            error = to_store_error(e)
            error.context = context
            raise error from e
