"""Pytest configuration and fixtures."""

import contextlib
import copy
import os
from datetime import date, timedelta
from decimal import Decimal

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DB_HOST", "localhost")
os.environ.setdefault("DB_PORT", "5432")
os.environ.setdefault("DB_NAME", "bank_accounts_test")
os.environ.setdefault("DB_USER", "postgres")
os.environ.setdefault("DB_PASS", "postgres")

import pytest
from fastapi.testclient import TestClient

from app.api.v1 import deps
from app.core.cache import CacheStore
from app.core.config import settings
from app.core.exceptions import CurrencySourceException
from app.core.security import create_access_token
from app.db.models.card_model import CardStatus
from app.db.models.user_model import UserRole, UserStatus, UserVisibility
from app.main import app, media_files
from app.services.card_service import CardService
from app.services.currency_service import CurrencyDataService
from app.services.message_service import MessageService
from app.services.user_service import UserService

RATES = {
    "USD": Decimal("1"),
    "EUR": Decimal("0.92"),
    "UAH": Decimal("41.2"),
    "CZK": Decimal("23.1"),
    "PLN": Decimal("3.95"),
}


class FakeDB:
    """Tables kept as plain dicts, keyed by id."""

    def __init__(self):
        self.users: dict[int, dict] = {}
        self.cards: dict[int, dict] = {}
        self.messages: dict[int, dict] = {}
        self.currency_data: dict[str, dict] = {}
        self.transfers: dict[str, dict] = {}
        self._ids: dict[str, int] = {}

    def next_id(self, table: str) -> int:
        self._ids[table] = self._ids.get(table, 0) + 1
        return self._ids[table]

    def add_user(self, **overrides) -> dict:
        user_id = self.next_id("users")
        user = {
            "id": user_id,
            "user_role": UserRole.ROLE_USER.value,
            "status": UserStatus.STATUS_DEFAULT.value,
            "visibility": UserVisibility.STATUS_ONLINE.value,
            "name": "Alice",
            "surname": "Novak",
            "date_of_birth": date(1995, 4, 12),
            "country_of_origin": "Czechia",
            "email": f"user{user_id}@mail.com",
            "hashed_password": "",
            "avatar": settings.DEFAULT_AVATAR_URL,
            "phone_number": "+420777123456",
        }
        user.update(overrides)
        self.users[user_id] = user
        return copy.deepcopy(user)

    def add_card(self, user_id: int, **overrides) -> dict:
        card_id = self.next_id("cards")
        card = {
            "id": card_id,
            "user_id": user_id,
            "card_number": f"{4000000000000000 + card_id}",
            "cvv": 123,
            "pin": 1234,
            "balance": Decimal("0.00"),
            "holder_name": "Alice Novak",
            "iban": "CZ6508000000192000145399",
            "swift": "GIBACZPXXXX",
            "account_number": "1920001453",
            "currency_type": "EUR",
            "card_type": "VISA",
            "status": CardStatus.STATUS_CARD_DEFAULT.value,
            "card_expiration_date": date.today() + timedelta(days=365),
            "recipient_time": None,
        }
        card.update(overrides)
        self.cards[card_id] = card
        return copy.deepcopy(card)

    def add_message(self, sender_id: int, receiver_id: int, content: str, timestamp) -> dict:
        message_id = self.next_id("messages")
        message = {
            "id": message_id,
            "sender_id": sender_id,
            "receiver_id": receiver_id,
            "content": content,
            "timestamp": timestamp,
        }
        self.messages[message_id] = message
        return copy.deepcopy(message)

    def add_rates(self, rates: dict) -> None:
        for currency, rate in rates.items():
            self.currency_data[currency] = {
                "id": self.next_id("currency_data"),
                "currency": currency,
                "rate": rate,
                "updated_at": None,
            }


class FakeUserRepository:
    def __init__(self, db: FakeDB):
        self.db = db

    async def get_by_id(self, user_id):
        user = self.db.users.get(user_id)
        return copy.deepcopy(user) if user else None

    async def get_by_email(self, email):
        for user in self.db.users.values():
            if user["email"].lower() == email.lower():
                return copy.deepcopy(user)
        return None

    async def list_all(self):
        return [copy.deepcopy(u) for _, u in sorted(self.db.users.items())]

    async def list_page(self, limit, offset, descending=False):
        users = sorted(self.db.users.values(), key=lambda u: (u["name"], u["id"]), reverse=descending)
        return copy.deepcopy(users[offset:offset + limit])

    async def count(self):
        return len(self.db.users)

    async def create(self, user_in):
        user_id = self.db.next_id("users")
        self.db.users[user_id] = {"id": user_id, **user_in}
        return copy.deepcopy(self.db.users[user_id])

    async def update(self, user_id, fields):
        if user_id not in self.db.users:
            return None
        self.db.users[user_id].update(fields)
        return copy.deepcopy(self.db.users[user_id])

    async def delete(self, user_id):
        if self.db.users.pop(user_id, None) is None:
            return False
        self.db.cards = {k: c for k, c in self.db.cards.items() if c["user_id"] != user_id}
        self.db.messages = {
            k: m for k, m in self.db.messages.items()
            if user_id not in (m["sender_id"], m["receiver_id"])
        }
        return True


class FakeCardRepository:
    def __init__(self, db: FakeDB):
        self.db = db

    def transaction(self):
        return contextlib.nullcontext()

    async def get_by_id(self, card_id):
        card = self.db.cards.get(card_id)
        return copy.deepcopy(card) if card else None

    lock_by_id = get_by_id

    async def get_by_number(self, card_number):
        for card in self.db.cards.values():
            if card["card_number"] == card_number:
                return copy.deepcopy(card)
        return None

    async def list_by_user(self, user_id):
        return [copy.deepcopy(c) for _, c in sorted(self.db.cards.items()) if c["user_id"] == user_id]

    async def list_all(self):
        return [copy.deepcopy(c) for _, c in sorted(self.db.cards.items())]

    async def list_page(self, limit, offset, descending=False):
        cards = sorted(self.db.cards.values(), key=lambda c: c["card_number"], reverse=descending)
        return copy.deepcopy(cards[offset:offset + limit])

    async def count(self):
        return len(self.db.cards)

    async def create_card(self, card_in):
        card_id = self.db.next_id("cards")
        self.db.cards[card_id] = {"id": card_id, "recipient_time": None, **card_in}
        return copy.deepcopy(self.db.cards[card_id])

    async def update(self, card_id, fields):
        if card_id not in self.db.cards:
            return None
        self.db.cards[card_id].update(fields)
        return copy.deepcopy(self.db.cards[card_id])

    async def delete(self, card_id):
        return self.db.cards.pop(card_id, None) is not None


class FakeCurrencyDataRepository:
    def __init__(self, db: FakeDB):
        self.db = db

    async def list_all(self):
        return [copy.deepcopy(r) for _, r in sorted(self.db.currency_data.items())]

    async def get_by_currency(self, currency):
        row = self.db.currency_data.get(currency)
        return copy.deepcopy(row) if row else None

    async def replace_all(self, rates):
        self.db.currency_data = {}
        self.db.add_rates(rates)
        return await self.list_all()


class FakeMessageRepository:
    def __init__(self, db: FakeDB):
        self.db = db

    async def list_all(self):
        # storage order, not timestamp order
        return [copy.deepcopy(m) for m in reversed(list(self.db.messages.values()))]

    async def get_by_id(self, message_id):
        message = self.db.messages.get(message_id)
        return copy.deepcopy(message) if message else None

    async def list_by_content(self, content):
        return [copy.deepcopy(m) for m in self.db.messages.values() if m["content"] == content]

    async def create(self, sender_id, receiver_id, content, timestamp):
        return self.db.add_message(sender_id, receiver_id, content, timestamp)


class FakeTransferRepository:
    def __init__(self, db: FakeDB):
        self.db = db

    async def get_by_reference_number(self, reference_number):
        transfer = self.db.transfers.get(reference_number)
        return copy.deepcopy(transfer) if transfer else None


class FakeRateClient:
    def __init__(self, rates=None, error: bool = False):
        self.rates = dict(RATES if rates is None else rates)
        self.error = error
        self.calls = 0

    async def fetch_rates(self, currencies):
        self.calls += 1
        if self.error:
            raise CurrencySourceException("Currency rate source is unavailable.")
        return {code: self.rates[code] for code in currencies}


@pytest.fixture
def db() -> FakeDB:
    fake_db = FakeDB()
    fake_db.add_rates(RATES)
    return fake_db


@pytest.fixture
def cache() -> CacheStore:
    return CacheStore(default_ttl=300)


@pytest.fixture
def user_repo(db) -> FakeUserRepository:
    return FakeUserRepository(db)


@pytest.fixture
def card_repo(db) -> FakeCardRepository:
    return FakeCardRepository(db)


@pytest.fixture
def currency_repo(db) -> FakeCurrencyDataRepository:
    return FakeCurrencyDataRepository(db)


@pytest.fixture
def message_repo(db) -> FakeMessageRepository:
    return FakeMessageRepository(db)


@pytest.fixture
def rate_client() -> FakeRateClient:
    return FakeRateClient()


@pytest.fixture
def user_service(user_repo, cache) -> UserService:
    return UserService(user_repo, cache)


@pytest.fixture
def currency_service(currency_repo, rate_client) -> CurrencyDataService:
    return CurrencyDataService(currency_repo, rate_client)


@pytest.fixture
def card_service(card_repo, user_repo, currency_service, cache) -> CardService:
    return CardService(card_repo, user_repo, currency_service, cache)


@pytest.fixture
def message_service(message_repo, user_repo, cache) -> MessageService:
    return MessageService(message_repo, user_repo, cache)


@pytest.fixture
def media_root(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "MEDIA_ROOT", str(tmp_path))
    monkeypatch.setattr(media_files, "directory", str(tmp_path))
    monkeypatch.setattr(media_files, "all_directories", [str(tmp_path)])
    monkeypatch.setattr(media_files, "config_checked", False)
    return tmp_path


@pytest.fixture
def client(db, cache, rate_client, media_root):
    app.dependency_overrides[deps.get_user_repo] = lambda: FakeUserRepository(db)
    app.dependency_overrides[deps.get_card_repo] = lambda: FakeCardRepository(db)
    app.dependency_overrides[deps.get_currency_repo] = lambda: FakeCurrencyDataRepository(db)
    app.dependency_overrides[deps.get_message_repo] = lambda: FakeMessageRepository(db)
    app.dependency_overrides[deps.get_transfer_repo] = lambda: FakeTransferRepository(db)
    app.dependency_overrides[deps.get_cache] = lambda: cache
    app.dependency_overrides[deps.get_currency_client] = lambda: rate_client
    # no lifespan: the asyncpg pool is never opened
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


def auth_headers(user: dict) -> dict:
    token = create_access_token(subject=str(user["id"]))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers
