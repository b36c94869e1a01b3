"""ChatMember ORM — membership of a user in a chat.

Invariants:
    - (user_id, chat_id) is the primary key, so a repeated insert conflicts
      and is absorbed by ON CONFLICT DO NOTHING
    - Rows go away with their user or chat (ON DELETE CASCADE)
"""

from sqlalchemy import BigInteger, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from cli_chat.db.base import Base


class ChatMember(Base):
    __tablename__ = "chat_member"

    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True,
    )
    chat_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("chat.id", ondelete="CASCADE"), primary_key=True,
    )
