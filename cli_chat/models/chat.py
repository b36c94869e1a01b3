"""Chat ORM."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from cli_chat.db.base import Base, BigIntPK


class Chat(Base):
    __tablename__ = "chat"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
