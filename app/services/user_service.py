# app/services/user_service.py

import logging
import uuid
from pathlib import Path
from typing import Optional

from app.core.cache import CacheStore, USERS, CARDS, MESSAGES
from app.core.config import settings
from app.core.exceptions import BadRequestException, NotFoundException, UserAlreadyExistsException
from app.core.security import hash_password
from app.db.models.user_model import UserRole, UserStatus, UserVisibility
from app.repositories.user_repo import UserRepository
from app.schemas.user_schema import UserCreate

logger = logging.getLogger(__name__)

SORT_OPTIONS = {"asc": False, "desc": True}
AVATAR_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def parse_role(value: Optional[str]) -> UserRole:
    if not value:
        raise BadRequestException("User role must be filled.")
    name = value.strip().upper()
    if not name.startswith("ROLE_"):
        name = f"ROLE_{name}"
    try:
        return UserRole(name)
    except ValueError:
        raise BadRequestException(f"User role {value} does not exist.")


class UserService:
    def __init__(self, user_repo: UserRepository, cache: CacheStore):
        self.user_repo = user_repo
        self.cache = cache

    # ------------------ Reads ------------------ #

    async def get_all(self) -> list[dict]:
        return await self.cache.get_or_load(USERS, "all", self.user_repo.list_all)

    async def filter(self, page: int, size: int, sort: str) -> dict:
        key = sort.lower()
        if key not in SORT_OPTIONS:
            raise BadRequestException("Invalid sort option. Use 'asc' or 'desc'.")
        logger.info(f"Sorting users by name in {key} order ...")

        async def load():
            items = await self.user_repo.list_page(size, page * size, descending=SORT_OPTIONS[key])
            total = await self.user_repo.count()
            return {"items": items, "total": total, "page": page, "size": size, "sort": key}

        return await self.cache.get_or_load(USERS, ("page", page, size, key), load)

    async def get_by_id(self, user_id: int) -> dict:
        user = await self.cache.get_or_load(USERS, user_id, lambda: self.user_repo.get_by_id(user_id))
        if user is None:
            raise NotFoundException(f"User with id: {user_id} not found.")
        return user

    # ------------------ Writes ------------------ #

    async def create(self, user_in: UserCreate) -> dict:
        if await self.user_repo.get_by_email(user_in.email):
            raise UserAlreadyExistsException("email")

        user_data = {
            "user_role": UserRole.ROLE_USER.value,
            "status": UserStatus.STATUS_DEFAULT.value,
            "visibility": UserVisibility.STATUS_ONLINE.value,
            "name": user_in.name,
            "surname": user_in.surname,
            "date_of_birth": user_in.date_of_birth,
            "country_of_origin": user_in.country_of_origin,
            "email": user_in.email,
            "hashed_password": hash_password(user_in.password),
            "avatar": settings.DEFAULT_AVATAR_URL,
            "phone_number": user_in.phone_number,
        }
        try:
            user = await self.user_repo.create(user_data)
        except ValueError:
            raise UserAlreadyExistsException("email")
        self.cache.invalidate_all(USERS)
        logger.info(f"User {user['id']} registered")
        return user

    async def _update(self, user_id: int, fields: dict) -> dict:
        user = await self.user_repo.update(user_id, fields)
        if user is None:
            raise NotFoundException(f"User with id: {user_id} not found.")
        self.cache.invalidate_all(USERS)
        return user

    async def _ensure_email_free(self, user_id: int, email: str) -> None:
        owner = await self.user_repo.get_by_email(email)
        if owner is not None and owner["id"] != user_id:
            raise UserAlreadyExistsException("email")

    async def _update_email_fields(self, user_id: int, fields: dict) -> dict:
        try:
            return await self._update(user_id, fields)
        except ValueError:
            # lost a race with another registration of the same address
            raise UserAlreadyExistsException("email")

    async def update(self, user_id: int, email: str, password: str, phone_number: str) -> dict:
        await self.get_by_id(user_id)
        await self._ensure_email_free(user_id, email)
        return await self._update_email_fields(user_id, {
            "email": email,
            "hashed_password": hash_password(password),
            "phone_number": phone_number,
        })

    async def update_email(self, user_id: int, email: str) -> dict:
        await self.get_by_id(user_id)
        await self._ensure_email_free(user_id, email)
        return await self._update_email_fields(user_id, {"email": email})

    async def update_password(self, user_id: int, password: str) -> dict:
        return await self._update(user_id, {"hashed_password": hash_password(password)})

    async def update_phone_number(self, user_id: int, phone_number: str) -> dict:
        return await self._update(user_id, {"phone_number": phone_number})

    async def update_role(self, user_id: int, role: Optional[str]) -> dict:
        user_role = parse_role(role)
        user = await self._update(user_id, {"user_role": user_role.value})
        logger.info(f"User {user_id} role set to {user_role.value}")
        return user

    async def toggle_status(self, user_id: int) -> dict:
        user = await self.get_by_id(user_id)
        if user["status"] == UserStatus.STATUS_BLOCKED:
            new_status = UserStatus.STATUS_UNBLOCKED
        else:
            new_status = UserStatus.STATUS_BLOCKED
        user = await self._update(user_id, {"status": new_status.value})
        logger.info(f"User {user_id} status set to {new_status.value}")
        return user

    async def toggle_visibility(self, user_id: int) -> dict:
        user = await self.get_by_id(user_id)
        if user["visibility"] == UserVisibility.STATUS_ONLINE:
            new_visibility = UserVisibility.STATUS_OFFLINE
        else:
            new_visibility = UserVisibility.STATUS_ONLINE
        return await self._update(user_id, {"visibility": new_visibility.value})

    async def set_visibility(self, user_id: int, visibility: UserVisibility) -> dict:
        return await self._update(user_id, {"visibility": visibility.value})

    async def upload_avatar(self, user_id: int, filename: Optional[str], content_type: Optional[str],
                            data: bytes) -> dict:
        await self.get_by_id(user_id)
        extension = AVATAR_EXTENSIONS.get((content_type or "").lower())
        if extension is None:
            raise BadRequestException("Avatar must be a PNG, JPEG, GIF or WEBP image.")
        if not data:
            raise BadRequestException("Avatar file is empty.")

        stored_name = f"{user_id}_{uuid.uuid4().hex}{extension}"
        target_dir = Path(settings.MEDIA_ROOT) / "avatars"
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / stored_name).write_bytes(data)

        avatar_url = f"{settings.MEDIA_URL.rstrip('/')}/avatars/{stored_name}"
        logger.info(f"Avatar {filename!r} stored for user {user_id} as {stored_name}")
        return await self._update(user_id, {"avatar": avatar_url})

    async def delete(self, user_id: int) -> None:
        if not await self.user_repo.delete(user_id):
            raise NotFoundException(f"User with id: {user_id} not found.")
        # owned cards and messages go with the user (ON DELETE CASCADE)
        self.cache.invalidate_all(USERS, CARDS, MESSAGES)
        logger.info(f"User {user_id} deleted")
