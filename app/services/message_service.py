# app/services/message_service.py

import logging
from datetime import datetime, timezone

from app.core.cache import CacheStore, MESSAGES
from app.core.exceptions import BadRequestException, NotFoundException
from app.repositories.message_repo import MessageRepository
from app.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

MAX_CONTENT_LENGTH = 100


def message_order(message: dict):
    return message["timestamp"], message["id"]


class MessageService:
    def __init__(self, message_repo: MessageRepository, user_repo: UserRepository, cache: CacheStore):
        self.message_repo = message_repo
        self.user_repo = user_repo
        self.cache = cache

    async def get_all(self) -> list[dict]:
        return await self.cache.get_or_load(MESSAGES, "all", self.message_repo.list_all)

    async def get_by_id(self, message_id: int) -> dict:
        message = await self.cache.get_or_load(
            MESSAGES, message_id, lambda: self.message_repo.get_by_id(message_id)
        )
        if message is None:
            raise NotFoundException(f"Message with id {message_id} not found.")
        return message

    async def get_by_content(self, content: str) -> list[dict]:
        if not content:
            raise NotFoundException(f"Message {content} not found.")
        return await self.cache.get_or_load(
            MESSAGES, ("content", content), lambda: self.message_repo.list_by_content(content)
        )

    async def _sorted_by(self, field: str, user_id: int) -> list[dict]:
        messages = sorted(await self.message_repo.list_all(), key=message_order)
        return [message for message in messages if message[field] == user_id]

    async def get_sorted_by_sender(self, sender_id: int) -> list[dict]:
        return await self.cache.get_or_load(
            MESSAGES, ("sender", sender_id), lambda: self._sorted_by("sender_id", sender_id)
        )

    async def get_sorted_by_receiver(self, receiver_id: int) -> list[dict]:
        return await self.cache.get_or_load(
            MESSAGES, ("receiver", receiver_id), lambda: self._sorted_by("receiver_id", receiver_id)
        )

    async def send(self, sender_id: int, receiver_id: int, content: str) -> dict:
        if not content or len(content) > MAX_CONTENT_LENGTH:
            raise BadRequestException("The length of the message must be between 1 and 100 characters")
        if await self.user_repo.get_by_id(sender_id) is None:
            raise NotFoundException(f"User with id: {sender_id} not found.")
        if await self.user_repo.get_by_id(receiver_id) is None:
            raise NotFoundException(f"User with id: {receiver_id} not found.")

        message = await self.message_repo.create(
            sender_id, receiver_id, content, datetime.now(timezone.utc)
        )
        self.cache.invalidate_all(MESSAGES)
        logger.info(f"Message {message['id']} sent from user {sender_id} to user {receiver_id}")
        return message
