"""Chat Service — chats, membership, and messages.

Invariants:
    - delete_chat rejects id <= 0 with ValidationError before any I/O
    - Repeated membership / message inserts are absorbed (ON CONFLICT DO NOTHING)
    - get_messages never checks chat existence: unknown chat -> empty list
    - Messages listed by (sent_at, id) ascending
"""

import logging

from cli_chat.core.domain_types import ChatId, Message
from cli_chat.core.errors import ErrorContext, NotFoundError, ValidationError
from cli_chat.core.row_mapper import (
    CHAT_MEMBER_TABLE,
    CHAT_TABLE,
    MESSAGE_COLUMNS,
    MESSAGE_TABLE,
    chat_insert_values,
    map_id,
    map_message,
    member_insert_values,
    message_insert_values,
)
from cli_chat.services.statement_runner import StatementRunner

logger = logging.getLogger(__name__)

MESSAGE_ORDER = ("sent_at", "id")


class ChatService(StatementRunner):
    """Chat server operations."""

    async def create_chat(self, name: str) -> ChatId:
        ctx = ErrorContext(rpc_method="CreateChat", entity=CHAT_TABLE)
        query = self.builder.insert(
            CHAT_TABLE, chat_insert_values(name), returning="id",
        )
        chat_id = ChatId(map_id(await self.fetch_one(query, ctx, commit=True)))
        logger.info(f"Inserted chat with id: {chat_id}", extra={"chat_id": chat_id})
        return chat_id

    async def delete_chat(self, chat_id: int) -> None:
        ctx = ErrorContext(rpc_method="DeleteChat", entity=CHAT_TABLE, entity_id=chat_id)
        if chat_id <= 0:
            raise ValidationError("invalid chat id", "id", ctx)
        query = self.builder.delete(CHAT_TABLE, where={"id": chat_id})
        rows = await self.execute(query, ctx)
        if rows == 0:
            logger.info(f"No chat found with id: {chat_id}", extra={"chat_id": chat_id})
            raise NotFoundError("chat", chat_id, ctx)
        logger.info(
            f"Deleted chat with id: {chat_id}",
            extra={"chat_id": chat_id, "rows_affected": rows},
        )

    async def add_user_to_chat(self, user_id: int, chat_id: int) -> None:
        ctx = ErrorContext(rpc_method="AddUserToChat", entity=CHAT_MEMBER_TABLE)
        query = self.builder.insert(
            CHAT_MEMBER_TABLE,
            member_insert_values(user_id, chat_id),
            on_conflict_do_nothing=True,
        )
        rows = await self.execute(query, ctx)
        if rows == 0:
            logger.info(
                f"User {user_id} already in chat {chat_id}",
                extra={"user_id": user_id, "chat_id": chat_id},
            )

    async def send_message(self, chat_id: int, sender_id: int, content: str) -> None:
        ctx = ErrorContext(rpc_method="SendMessage", entity=MESSAGE_TABLE)
        query = self.builder.insert(
            MESSAGE_TABLE,
            message_insert_values(chat_id, sender_id, content),
            on_conflict_do_nothing=True,
        )
        rows = await self.execute(query, ctx)
        logger.info(
            f"Inserted {rows} rows",
            extra={"chat_id": chat_id, "user_id": sender_id, "rows_affected": rows},
        )

    async def get_messages(self, chat_id: int) -> list[Message]:
        ctx = ErrorContext(rpc_method="GetMessages", entity=MESSAGE_TABLE)
        query = self.builder.select(
            MESSAGE_TABLE, MESSAGE_COLUMNS,
            where={"chat_id": chat_id}, order_by=MESSAGE_ORDER,
        )
        return [map_message(row) for row in await self.fetch_all(query, ctx)]
