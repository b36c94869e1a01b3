"""User Service — get/create/update/delete over the `user` table.

Invariants:
    - Presence for update/delete is detected by rows affected, never by a prior read
    - update always sets updated_at; name/email change only when supplied
    - No uniqueness pre-check on create; the schema rejects duplicates (Internal)
"""

import logging
from datetime import datetime, timezone

from cli_chat.core.domain_types import User, UserId, UserRole
from cli_chat.core.errors import ErrorContext, NotFoundError
from cli_chat.core.row_mapper import (
    USER_COLUMNS,
    USER_TABLE,
    map_id,
    map_user,
    user_insert_values,
    user_update_values,
)
from cli_chat.services.statement_runner import StatementRunner

logger = logging.getLogger(__name__)


class UserService(StatementRunner):
    """User directory operations."""

    async def get(self, user_id: int) -> User:
        ctx = ErrorContext(rpc_method="Get", entity=USER_TABLE, entity_id=user_id)
        query = self.builder.select(USER_TABLE, USER_COLUMNS, where={"id": user_id})
        row = await self.fetch_one(query, ctx)
        if row is None:
            raise NotFoundError("user", user_id, ctx)
        return map_user(row)

    async def create(self, name: str, email: str, role: UserRole) -> UserId:
        ctx = ErrorContext(rpc_method="Create", entity=USER_TABLE)
        query = self.builder.insert(
            USER_TABLE, user_insert_values(name, email, role), returning="id",
        )
        user_id = UserId(map_id(await self.fetch_one(query, ctx, commit=True)))
        logger.info(f"Inserted user with id: {user_id}", extra={"user_id": user_id})
        return user_id

    async def update(
        self, user_id: int, name: str | None = None, email: str | None = None,
    ) -> None:
        ctx = ErrorContext(rpc_method="Update", entity=USER_TABLE, entity_id=user_id)
        query = self.builder.update(
            USER_TABLE,
            user_update_values(datetime.now(timezone.utc), name=name, email=email),
            where={"id": user_id},
        )
        rows = await self.execute(query, ctx)
        if rows == 0:
            logger.info(f"No user found with id: {user_id}", extra={"user_id": user_id})
            raise NotFoundError("user", user_id, ctx)
        logger.info(f"Updated {rows} rows", extra={"user_id": user_id, "rows_affected": rows})

    async def delete(self, user_id: int) -> None:
        ctx = ErrorContext(rpc_method="Delete", entity=USER_TABLE, entity_id=user_id)
        query = self.builder.delete(USER_TABLE, where={"id": user_id})
        rows = await self.execute(query, ctx)
        if rows == 0:
            logger.info(f"No user found with id: {user_id}", extra={"user_id": user_id})
            raise NotFoundError("user", user_id, ctx)
        logger.info(f"Deleted user with id: {user_id}", extra={"user_id": user_id})
