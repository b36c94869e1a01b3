"""Row Mapper — relational rows to domain records, and domain values to column maps.

Invariants:
    - Rows are read positionally in the declared column order (USER_COLUMNS, MESSAGE_COLUMNS)
    - A nullable timestamp maps to None, never to a zero value
    - Returned timestamps are timezone-aware (naive store values are UTC)
    - Width or type mismatch raises MappingError
"""

from datetime import datetime, timezone
from typing import Any, Sequence

from cli_chat.core.domain_types import (
    ChatId, Message, MessageId, User, UserId, UserRole,
)
from cli_chat.core.errors import MappingError

USER_TABLE = "user"
CHAT_TABLE = "chat"
CHAT_MEMBER_TABLE = "chat_member"
MESSAGE_TABLE = "message"

USER_COLUMNS = ("id", "name", "email", "role", "created_at", "updated_at")
MESSAGE_COLUMNS = ("id", "chat_id", "sender_id", "content", "sent_at")


# ─── Scalars ─────────────────────────────────────────────────────

def to_timestamp(value: Any, column: str) -> datetime:
    if not isinstance(value, datetime):
        raise MappingError(f"{column}: expected timestamp, got {type(value).__name__}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_optional_timestamp(value: Any, column: str) -> datetime | None:
    """Nullable timestamp column -> optional field (absent when NULL)."""
    if value is None:
        return None
    return to_timestamp(value, column)


def _to_int(value: Any, column: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MappingError(f"{column}: expected integer, got {type(value).__name__}")
    return value


def _to_str(value: Any, column: str) -> str:
    if not isinstance(value, str):
        raise MappingError(f"{column}: expected string, got {type(value).__name__}")
    return value


def _check_width(row: Sequence[Any] | None, columns: Sequence[str]) -> Sequence[Any]:
    if row is None:
        raise MappingError("expected a result row, got none")
    if len(row) != len(columns):
        raise MappingError(f"expected {len(columns)} columns, got {len(row)}")
    return row


# ─── Rows -> records ─────────────────────────────────────────────

def map_id(row: Sequence[Any] | None) -> int:
    """Single-column row from INSERT ... RETURNING id."""
    (value,) = _check_width(row, ("id",))
    return _to_int(value, "id")


def map_user(row: Sequence[Any] | None) -> User:
    id_, name, email, role, created_at, updated_at = _check_width(row, USER_COLUMNS)
    try:
        user_role = UserRole(_to_int(role, "role"))
    except ValueError:
        raise MappingError(f"role: unknown value {role!r}") from None
    return User(
        id=UserId(_to_int(id_, "id")),
        name=_to_str(name, "name"),
        email=_to_str(email, "email"),
        role=user_role,
        created_at=to_timestamp(created_at, "created_at"),
        updated_at=to_optional_timestamp(updated_at, "updated_at"),
    )


def map_message(row: Sequence[Any] | None) -> Message:
    id_, chat_id, sender_id, content, sent_at = _check_width(row, MESSAGE_COLUMNS)
    return Message(
        id=MessageId(_to_int(id_, "id")),
        chat_id=ChatId(_to_int(chat_id, "chat_id")),
        sender_id=UserId(_to_int(sender_id, "sender_id")),
        content=_to_str(content, "content"),
        sent_at=to_timestamp(sent_at, "sent_at"),
    )


# ─── Values -> columns ───────────────────────────────────────────

def user_insert_values(name: str, email: str, role: UserRole) -> dict[str, Any]:
    return {"name": name, "email": email, "role": int(role)}


def user_update_values(
    now: datetime, name: str | None = None, email: str | None = None,
) -> dict[str, Any]:
    """Set-list for a partial update. None leaves a column unchanged; "" clears it."""
    values: dict[str, Any] = {}
    if name is not None:
        values["name"] = name
    if email is not None:
        values["email"] = email
    values["updated_at"] = now
    return values


def chat_insert_values(name: str) -> dict[str, Any]:
    return {"name": name}


def member_insert_values(user_id: int, chat_id: int) -> dict[str, Any]:
    return {"user_id": user_id, "chat_id": chat_id}


def message_insert_values(chat_id: int, sender_id: int, content: str) -> dict[str, Any]:
    return {"chat_id": chat_id, "sender_id": sender_id, "content": content}
