"""ORM Models — SQLAlchemy declarative models for the persisted schema.

Invariants:
    - All models inherit from Base (db/base.py)
    - Services never query through these classes; they address tables by name
      through the QueryBuilder

Design Decisions:
    - All models imported here so Base.metadata is complete before any query is built
"""

from cli_chat.models.user import User  # noqa: F401
from cli_chat.models.chat import Chat  # noqa: F401
from cli_chat.models.chat_member import ChatMember  # noqa: F401
from cli_chat.models.message import Message  # noqa: F401
