import logging
from typing import List, Dict, Any

from fastapi import APIRouter, Depends, Query, status

from app.api.v1.deps import get_message_service, get_current_user, require_roles, STAFF
from app.schemas.message_schema import MessageCreate, MessageOut
from app.services.message_service import MessageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.get("/", response_model=List[MessageOut], dependencies=[Depends(require_roles(*STAFF))])
async def get_messages(message_service: MessageService = Depends(get_message_service)):
    logger.info("Getting all messages ...")
    return await message_service.get_all()


@router.get("/content", response_model=List[MessageOut], dependencies=[Depends(get_current_user)])
async def get_messages_by_content(
    content: str = Query(""),
    message_service: MessageService = Depends(get_message_service),
):
    logger.info("Getting messages by content ...")
    return await message_service.get_by_content(content)


@router.get("/sender/{sender_id}", response_model=List[MessageOut], dependencies=[Depends(get_current_user)])
async def get_messages_by_sender(sender_id: int, message_service: MessageService = Depends(get_message_service)):
    logger.info(f"Getting messages of sender id: {sender_id} ...")
    return await message_service.get_sorted_by_sender(sender_id)


@router.get("/receiver/{receiver_id}", response_model=List[MessageOut], dependencies=[Depends(get_current_user)])
async def get_messages_by_receiver(receiver_id: int,
                                   message_service: MessageService = Depends(get_message_service)):
    logger.info(f"Getting messages of receiver id: {receiver_id} ...")
    return await message_service.get_sorted_by_receiver(receiver_id)


@router.get("/{message_id}", response_model=MessageOut, dependencies=[Depends(get_current_user)])
async def get_message_by_id(message_id: int, message_service: MessageService = Depends(get_message_service)):
    logger.info(f"Getting message id: {message_id} ...")
    return await message_service.get_by_id(message_id)


@router.post("/", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
async def send_message(
    body: MessageCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service),
):
    logger.info(f"Sending message from user id: {current_user['id']} ...")
    return await message_service.send(current_user["id"], body.receiver_id, body.content)
