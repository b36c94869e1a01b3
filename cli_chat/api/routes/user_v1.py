"""User Service RPCs — /user_v1.UserV1/{Get,Create,Update,Delete}.

Invariants:
    - Thin handlers: decode request, call UserService under the deadline, encode response
    - Errors are raised, never rendered here (error_handlers.py maps them to status codes)
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cli_chat.api.routes.rpc_deadline import rpc_deadline, run_with_deadline
from cli_chat.infrastructure.database import get_db
from cli_chat.schemas.rpc import Empty
from cli_chat.schemas.user import (
    CreateRequest,
    CreateResponse,
    DeleteRequest,
    GetRequest,
    GetResponse,
    UpdateRequest,
)
from cli_chat.services.user_service import UserService

logger = logging.getLogger(__name__)

SERVICE_NAME = "user_v1.UserV1"
METHODS = ("Get", "Create", "Update", "Delete")

router = APIRouter(prefix=f"/{SERVICE_NAME}", tags=["user"])


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.post("/Get", response_model=GetResponse, response_model_exclude_none=True)
async def get_user(
    body: GetRequest,
    service: UserService = Depends(get_user_service),
    deadline: float = Depends(rpc_deadline),
):
    logger.info(f"Received get user request: {body!r}", extra={"rpc_method": "Get"})
    user = await run_with_deadline(service.get(body.id), deadline, "Get")
    return GetResponse.from_user(user)


@router.post("/Create", response_model=CreateResponse)
async def create_user(
    body: CreateRequest,
    service: UserService = Depends(get_user_service),
    deadline: float = Depends(rpc_deadline),
):
    logger.info(f"Received create user request: {body!r}", extra={"rpc_method": "Create"})
    user_id = await run_with_deadline(
        service.create(body.name, body.email, body.role), deadline, "Create",
    )
    return CreateResponse(id=user_id)


@router.post("/Update", response_model=Empty)
async def update_user(
    body: UpdateRequest,
    service: UserService = Depends(get_user_service),
    deadline: float = Depends(rpc_deadline),
):
    logger.info(f"Received update user request: {body!r}", extra={"rpc_method": "Update"})
    await run_with_deadline(
        service.update(body.id, name=body.name, email=body.email), deadline, "Update",
    )
    return Empty()


@router.post("/Delete", response_model=Empty)
async def delete_user(
    body: DeleteRequest,
    service: UserService = Depends(get_user_service),
    deadline: float = Depends(rpc_deadline),
):
    logger.info(f"Received delete user request: {body!r}", extra={"rpc_method": "Delete"})
    await run_with_deadline(service.delete(body.id), deadline, "Delete")
    return Empty()
