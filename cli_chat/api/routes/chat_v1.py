"""Chat Service RPCs — /chat_v1.ChatV1/{CreateChat,DeleteChat,AddUserToChat,SendMessage,GetMessages}.

Invariants:
    - Thin handlers: decode request, call ChatService under the deadline, encode response
    - SendMessage returns an empty body (no content echo)
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cli_chat.api.routes.rpc_deadline import rpc_deadline, run_with_deadline
from cli_chat.infrastructure.database import get_db
from cli_chat.schemas.chat import (
    AddUserToChatRequest,
    CreateChatRequest,
    CreateChatResponse,
    DeleteChatRequest,
    GetMessagesRequest,
    GetMessagesResponse,
    MessageItem,
    SendMessageRequest,
)
from cli_chat.schemas.rpc import Empty
from cli_chat.services.chat_service import ChatService

logger = logging.getLogger(__name__)

SERVICE_NAME = "chat_v1.ChatV1"
METHODS = ("CreateChat", "DeleteChat", "AddUserToChat", "SendMessage", "GetMessages")

router = APIRouter(prefix=f"/{SERVICE_NAME}", tags=["chat"])


def get_chat_service(db: AsyncSession = Depends(get_db)) -> ChatService:
    return ChatService(db)


@router.post("/CreateChat", response_model=CreateChatResponse)
async def create_chat(
    body: CreateChatRequest,
    service: ChatService = Depends(get_chat_service),
    deadline: float = Depends(rpc_deadline),
):
    logger.info(f"Received create chat request: {body!r}", extra={"rpc_method": "CreateChat"})
    chat_id = await run_with_deadline(service.create_chat(body.name), deadline, "CreateChat")
    return CreateChatResponse(id=chat_id)


@router.post("/DeleteChat", response_model=Empty)
async def delete_chat(
    body: DeleteChatRequest,
    service: ChatService = Depends(get_chat_service),
    deadline: float = Depends(rpc_deadline),
):
    logger.info(f"Received delete chat request: {body!r}", extra={"rpc_method": "DeleteChat"})
    await run_with_deadline(service.delete_chat(body.id), deadline, "DeleteChat")
    return Empty()


@router.post("/AddUserToChat", response_model=Empty)
async def add_user_to_chat(
    body: AddUserToChatRequest,
    service: ChatService = Depends(get_chat_service),
    deadline: float = Depends(rpc_deadline),
):
    logger.info(
        f"Adding user {body.user_id} to chat {body.chat_id}",
        extra={"rpc_method": "AddUserToChat", "user_id": body.user_id, "chat_id": body.chat_id},
    )
    await run_with_deadline(
        service.add_user_to_chat(body.user_id, body.chat_id), deadline, "AddUserToChat",
    )
    return Empty()


@router.post("/SendMessage", response_model=Empty)
async def send_message(
    body: SendMessageRequest,
    service: ChatService = Depends(get_chat_service),
    deadline: float = Depends(rpc_deadline),
):
    logger.info(f"Received send message request: {body!r}", extra={"rpc_method": "SendMessage"})
    await run_with_deadline(
        service.send_message(body.chat_id, body.sender_id, body.content),
        deadline, "SendMessage",
    )
    return Empty()


@router.post("/GetMessages", response_model=GetMessagesResponse)
async def get_messages(
    body: GetMessagesRequest,
    service: ChatService = Depends(get_chat_service),
    deadline: float = Depends(rpc_deadline),
):
    logger.info(
        f"Getting messages from chat {body.chat_id}",
        extra={"rpc_method": "GetMessages", "chat_id": body.chat_id},
    )
    messages = await run_with_deadline(
        service.get_messages(body.chat_id), deadline, "GetMessages",
    )
    return GetMessagesResponse(
        messages=[MessageItem.from_message(m) for m in messages],
    )
