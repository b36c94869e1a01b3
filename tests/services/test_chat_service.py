"""Chat Service — chats, membership, and messages against the in-memory store.

Invariants:
    - delete_chat with id <= 0 → ValidationError without touching the session
    - add_user_to_chat is idempotent and leaves one membership row
    - get_messages → [] for empty or unknown chats, ordered by (sent_at, id) otherwise
    - Foreign key violations surface as StoreError
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.dialects import sqlite

from cli_chat.core.domain_types import UserRole
from cli_chat.core.errors import NotFoundError, StoreError, ValidationError
from cli_chat.core.query_builder import QueryBuilder
from cli_chat.db.base import Base
from cli_chat.models.chat_member import ChatMember
from cli_chat.services.chat_service import ChatService
from cli_chat.services.user_service import UserService


@pytest.fixture
def chats(test_db):
    return ChatService(test_db)


@pytest.fixture
async def ada_id(test_db):
    return await UserService(test_db).create("Ada", "ada@x.io", UserRole.USER)


# ─── create / delete ─────────────────────────────────────────────

async def test_create_chat_returns_positive_id(chats):
    first = await chats.create_chat("General")
    second = await chats.create_chat("Random")
    assert first > 0
    assert second != first


async def test_delete_chat(chats):
    chat_id = await chats.create_chat("General")
    await chats.delete_chat(chat_id)
    with pytest.raises(NotFoundError):
        await chats.delete_chat(chat_id)


async def test_delete_missing_chat_is_not_found(chats):
    with pytest.raises(NotFoundError):
        await chats.delete_chat(12345)


@pytest.mark.parametrize("chat_id", [0, -1, -100])
async def test_delete_chat_invalid_id_never_reaches_store(chat_id):
    db = MagicMock()
    db.execute = AsyncMock()
    service = ChatService(db, builder=QueryBuilder(Base.metadata, sqlite.dialect()))

    with pytest.raises(ValidationError) as exc_info:
        await service.delete_chat(chat_id)

    assert exc_info.value.field == "id"
    db.execute.assert_not_awaited()


# ─── membership ──────────────────────────────────────────────────

async def test_add_user_to_chat_twice_keeps_one_row(chats, test_db, ada_id):
    chat_id = await chats.create_chat("General")

    await chats.add_user_to_chat(ada_id, chat_id)
    await chats.add_user_to_chat(ada_id, chat_id)

    count = await test_db.scalar(
        select(func.count()).select_from(ChatMember).where(
            ChatMember.user_id == ada_id, ChatMember.chat_id == chat_id,
        ),
    )
    assert count == 1


async def test_add_unknown_user_is_store_error(chats):
    chat_id = await chats.create_chat("General")
    with pytest.raises(StoreError):
        await chats.add_user_to_chat(999, chat_id)


# ─── messages ────────────────────────────────────────────────────

async def test_get_messages_empty_chat(chats):
    chat_id = await chats.create_chat("General")
    assert await chats.get_messages(chat_id) == []


async def test_get_messages_unknown_chat(chats):
    assert await chats.get_messages(424242) == []


async def test_send_and_get_messages_in_order(chats, ada_id):
    chat_id = await chats.create_chat("General")
    for content in ("first", "second", "third"):
        await chats.send_message(chat_id, ada_id, content)

    messages = await chats.get_messages(chat_id)

    assert [m.content for m in messages] == ["first", "second", "third"]
    assert all(m.chat_id == chat_id and m.sender_id == ada_id for m in messages)
    assert [m.id for m in messages] == sorted(m.id for m in messages)
    assert all(m.sent_at.tzinfo is not None for m in messages)


async def test_messages_scoped_to_chat(chats, ada_id):
    general = await chats.create_chat("General")
    random = await chats.create_chat("Random")
    await chats.send_message(general, ada_id, "hi")
    await chats.send_message(random, ada_id, "elsewhere")

    messages = await chats.get_messages(general)
    assert [m.content for m in messages] == ["hi"]


async def test_send_message_to_unknown_chat_is_store_error(chats, ada_id):
    with pytest.raises(StoreError):
        await chats.send_message(999, ada_id, "hi")


async def test_delete_chat_removes_its_messages(chats, ada_id):
    chat_id = await chats.create_chat("General")
    await chats.add_user_to_chat(ada_id, chat_id)
    await chats.send_message(chat_id, ada_id, "hi")

    await chats.delete_chat(chat_id)

    assert await chats.get_messages(chat_id) == []
