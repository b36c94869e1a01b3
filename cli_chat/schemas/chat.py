"""Chat Service Messages — request/response shapes for /chat_v1.ChatV1."""

from datetime import datetime

from cli_chat.core.domain_types import Message
from cli_chat.schemas.rpc import Int64, RpcMessage


class CreateChatRequest(RpcMessage):
    name: str


class CreateChatResponse(RpcMessage):
    id: Int64


class DeleteChatRequest(RpcMessage):
    id: Int64


class AddUserToChatRequest(RpcMessage):
    user_id: Int64
    chat_id: Int64


class SendMessageRequest(RpcMessage):
    chat_id: Int64
    sender_id: Int64
    content: str


class GetMessagesRequest(RpcMessage):
    chat_id: Int64


class MessageItem(RpcMessage):
    id: Int64
    chat_id: Int64
    sender_id: Int64
    content: str
    sent_at: datetime

    @classmethod
    def from_message(cls, message: Message) -> "MessageItem":
        return cls(
            id=message.id,
            chat_id=message.chat_id,
            sender_id=message.sender_id,
            content=message.content,
            sent_at=message.sent_at,
        )


class GetMessagesResponse(RpcMessage):
    messages: list[MessageItem]
