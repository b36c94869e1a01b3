"""User Service Messages — request/response shapes for /user_v1.UserV1.

Invariants:
    - UpdateRequest.name / email: None (or absent) means unchanged, "" means clear
    - GetResponse.updated_at omitted until the user is first updated
"""

from datetime import datetime

from cli_chat.core.domain_types import User, UserRole
from cli_chat.schemas.rpc import Int64, RpcMessage


class GetRequest(RpcMessage):
    id: Int64


class GetResponse(RpcMessage):
    id: Int64
    name: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "GetResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class CreateRequest(RpcMessage):
    name: str
    email: str
    role: UserRole = UserRole.UNSPECIFIED


class CreateResponse(RpcMessage):
    id: Int64


class UpdateRequest(RpcMessage):
    id: Int64
    name: str | None = None
    email: str | None = None


class DeleteRequest(RpcMessage):
    id: Int64
