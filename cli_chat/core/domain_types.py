"""Domain Types — typed records returned by the services.

Invariants:
    - Ids are store-generated positive integers (int64)
    - updated_at is None until the first update, never a zero timestamp
    - UserRole values match the wire enum numbers

Design Decisions:
    - Frozen dataclasses: records are snapshots of a row, not live objects
    - IntEnum for UserRole: stored as a small integer column
"""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
ChatId = NewType("ChatId", int)
MessageId = NewType("MessageId", int)


# ─── Enums ───────────────────────────────────────────────────────

class UserRole(IntEnum):
    """User role — maps to the `role` column."""
    UNSPECIFIED = 0
    USER = 1
    ADMIN = 2


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class User:
    id: UserId
    name: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Message:
    id: MessageId
    chat_id: ChatId
    sender_id: UserId
    content: str
    sent_at: datetime
