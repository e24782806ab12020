from typing import Optional
from app.core.exceptions import InvalidCredentialsException
from app.core.security import verify_password, create_access_token, token_lifetime
from app.db.models.user_model import UserStatus, UserVisibility
from app.repositories.user_repo import UserRepository
from app.services.user_service import UserService


class AuthService:
    def __init__(self, user_repo: UserRepository, user_service: UserService):
        self.user_repo = user_repo
        self.user_service = user_service

    async def authenticate(self, email: str, password: str) -> Optional[dict]:
        user = await self.user_repo.get_by_email(email)
        if not user:
            return None
        if not verify_password(password, user.get('hashed_password', '')):
            return None
        return user

    async def login(self, email: str, password: str) -> dict:
        user = await self.authenticate(email, password)
        if not user:
            raise InvalidCredentialsException()
        if user["status"] == UserStatus.STATUS_BLOCKED:
            raise InvalidCredentialsException("User is blocked.")
        return await self.user_service.set_visibility(user["id"], UserVisibility.STATUS_ONLINE)

    async def logout(self, user: dict) -> dict:
        return await self.user_service.set_visibility(user["id"], UserVisibility.STATUS_OFFLINE)

    def create_token_for_user(self, user: dict) -> str:
        return create_access_token(subject=str(user['id']), expires_delta=token_lifetime())
