from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from asyncpg import Connection

from app.core.cache import CacheStore, cache
from app.core.exceptions import ForbiddenException, TokenInvalidException
from app.core.security import decode_access_token
from app.db.models.user_model import UserRole
from app.db.session import get_db_connection
from app.repositories.card_repo import CardRepository
from app.repositories.currency_repo import CurrencyDataRepository
from app.repositories.message_repo import MessageRepository
from app.repositories.transfer_repo import TransferRepository
from app.repositories.user_repo import UserRepository
from app.schemas.auth_schema import TokenPayload
from app.services.auth_services import AuthService
from app.services.card_service import CardService
from app.services.currency_client import CurrencyRateClient
from app.services.currency_service import CurrencyDataService
from app.services.message_service import MessageService
from app.services.user_service import UserService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


# ------------------ Repositories ------------------ #

def get_user_repo(conn: Connection = Depends(get_db_connection)) -> UserRepository:
    return UserRepository(conn)

def get_card_repo(conn: Connection = Depends(get_db_connection)) -> CardRepository:
    return CardRepository(conn)

def get_currency_repo(conn: Connection = Depends(get_db_connection)) -> CurrencyDataRepository:
    return CurrencyDataRepository(conn)

def get_message_repo(conn: Connection = Depends(get_db_connection)) -> MessageRepository:
    return MessageRepository(conn)

def get_transfer_repo(conn: Connection = Depends(get_db_connection)) -> TransferRepository:
    return TransferRepository(conn)


# ------------------ Services ------------------ #

def get_cache() -> CacheStore:
    return cache

def get_currency_client() -> CurrencyRateClient:
    return CurrencyRateClient()

def get_user_service(
        user_repo: UserRepository = Depends(get_user_repo),
        store: CacheStore = Depends(get_cache),
) -> UserService:
    return UserService(user_repo, store)

def get_auth_service(
        user_repo: UserRepository = Depends(get_user_repo),
        user_service: UserService = Depends(get_user_service),
) -> AuthService:
    return AuthService(user_repo, user_service)

def get_currency_service(
        currency_repo: CurrencyDataRepository = Depends(get_currency_repo),
        client: CurrencyRateClient = Depends(get_currency_client),
) -> CurrencyDataService:
    return CurrencyDataService(currency_repo, client)

def get_card_service(
        card_repo: CardRepository = Depends(get_card_repo),
        user_repo: UserRepository = Depends(get_user_repo),
        currency_service: CurrencyDataService = Depends(get_currency_service),
        store: CacheStore = Depends(get_cache),
) -> CardService:
    return CardService(card_repo, user_repo, currency_service, store)

def get_message_service(
        message_repo: MessageRepository = Depends(get_message_repo),
        user_repo: UserRepository = Depends(get_user_repo),
        store: CacheStore = Depends(get_cache),
) -> MessageService:
    return MessageService(message_repo, user_repo, store)


# ------------------ Authentication ------------------ #

async def get_current_user(
        token: str = Depends(oauth2_scheme),
        user_repo: UserRepository = Depends(get_user_repo),
) -> dict:
    try:
        payload = decode_access_token(token)
        token_data = TokenPayload(**payload)
        user_id = int(token_data.sub)
    except (JWTError, TypeError, ValueError):
        raise TokenInvalidException()

    user_data = await user_repo.get_by_id(user_id)
    if user_data is None:
        raise TokenInvalidException()

    return user_data


def require_roles(*roles: UserRole):
    """Dependency that lets through only callers holding one of ``roles``."""
    allowed = {role.value for role in roles}

    async def checker(current_user: dict = Depends(get_current_user)) -> dict:
        if current_user["user_role"] not in allowed:
            raise ForbiddenException()
        return current_user

    return checker


ANY_ROLE = (UserRole.ROLE_USER, UserRole.ROLE_MODERATOR, UserRole.ROLE_ADMIN)
STAFF = (UserRole.ROLE_MODERATOR, UserRole.ROLE_ADMIN)
