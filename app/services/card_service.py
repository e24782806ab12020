# app/services/card_service.py

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from app.core.cache import CacheStore, CARDS, USERS
from app.core.exceptions import BadRequestException, NotFoundException
from app.db.models.card_model import Currency, CardType, CardStatus
from app.db.models.user_model import UserStatus
from app.repositories.card_repo import CardRepository
from app.repositories.user_repo import UserRepository
from app.services.conversion import convert_refill
from app.services.currency_service import CurrencyDataService
from app.services.generator import Generator

logger = logging.getLogger(__name__)

CARD_VALIDITY_YEARS = 5
SORT_OPTIONS = {"asc": False, "desc": True}


def add_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        # 29 February into a non-leap year
        return day.replace(year=day.year + years, day=28)


def is_expired(card: dict, today: Optional[date] = None) -> bool:
    today = today or date.today()
    return today > card["card_expiration_date"]


def parse_currency(value: Optional[str]) -> Currency:
    if not value:
        raise BadRequestException("Currency must be filled.")
    try:
        return Currency(value.upper())
    except ValueError:
        raise BadRequestException(f"Currency {value} does not exist.")


def parse_card_type(value: Optional[str]) -> CardType:
    if not value:
        raise BadRequestException("Card type must be filled.")
    try:
        return CardType(value.upper())
    except ValueError:
        raise BadRequestException(f"Card type {value} does not exist.")


class CardService:
    def __init__(
        self,
        card_repo: CardRepository,
        user_repo: UserRepository,
        currency_service: CurrencyDataService,
        cache: CacheStore,
        generator: Generator | None = None,
    ):
        self.card_repo = card_repo
        self.user_repo = user_repo
        self.currency_service = currency_service
        self.cache = cache
        self.generator = generator or Generator()

    # ------------------ Reads ------------------ #

    async def get_all(self) -> list[dict]:
        return await self.cache.get_or_load(CARDS, "all", self.card_repo.list_all)

    async def filter(self, page: int, size: int, sort: str) -> dict:
        key = sort.lower()
        if key not in SORT_OPTIONS:
            raise BadRequestException("Invalid sort option. Use 'asc' or 'desc'.")

        async def load():
            items = await self.card_repo.list_page(size, page * size, descending=SORT_OPTIONS[key])
            total = await self.card_repo.count()
            return {"items": items, "total": total, "page": page, "size": size, "sort": key}

        return await self.cache.get_or_load(CARDS, ("page", page, size, key), load)

    async def get_by_id(self, card_id: int) -> dict:
        card = await self.cache.get_or_load(CARDS, card_id, lambda: self.card_repo.get_by_id(card_id))
        if card is None:
            raise NotFoundException(f"Card with id: {card_id} not found.")
        return card

    async def get_by_number(self, card_number: str) -> dict:
        card = await self.cache.get_or_load(
            CARDS, ("number", card_number), lambda: self.card_repo.get_by_number(card_number)
        )
        if card is None:
            raise NotFoundException(f"Card with number: {card_number} not found.")
        return card

    async def list_for_user(self, user_id: int) -> list[dict]:
        return await self.cache.get_or_load(
            CARDS, ("user", user_id), lambda: self.card_repo.list_by_user(user_id)
        )

    # ------------------ Writes ------------------ #

    async def create_card(self, user_id: int, currency: Optional[str], card_type: Optional[str]) -> dict:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundException(f"User with id: {user_id} not found.")
        if user["status"] == UserStatus.STATUS_BLOCKED:
            raise BadRequestException("Creating card is unavailable for blocked user.")

        currency_type = parse_currency(currency)
        chosen_type = parse_card_type(card_type)

        card_in = {
            "user_id": user_id,
            "card_number": self.generator.card_number(),
            "cvv": self.generator.cvv(),
            "pin": self.generator.pin(),
            "balance": Decimal("0.00"),
            "holder_name": f"{user['name']} {user['surname']}",
            "iban": self.generator.iban(),
            "swift": self.generator.swift(),
            "account_number": self.generator.account_number(),
            "currency_type": currency_type.value,
            "card_type": chosen_type.value,
            "status": CardStatus.STATUS_CARD_DEFAULT.value,
            "card_expiration_date": add_years(date.today(), CARD_VALIDITY_YEARS),
        }
        try:
            card = await self.card_repo.create_card(card_in)
        except ValueError as e:
            raise BadRequestException(str(e))
        self.cache.invalidate_all(CARDS, USERS)
        logger.info(f"Card {card['id']} created for user {user_id}")
        return card

    async def refill(self, card_id: int, pin: int, amount) -> dict:
        async with self.card_repo.transaction():
            card = await self.card_repo.lock_by_id(card_id)
            if card is None:
                raise NotFoundException(f"Card with id: {card_id} not found.")
            if card["status"] == CardStatus.STATUS_CARD_BLOCKED:
                raise BadRequestException("Operation is unavailable for blocked card.")
            if is_expired(card):
                raise BadRequestException("Card is expired.")
            if card["pin"] != pin:
                raise BadRequestException("Invalid pin or card is blocked.")

            rate = (await self.currency_service.find(card["currency_type"]))["rate"]
            new_balance = convert_refill(card["currency_type"], card["balance"], amount, rate)
            updated = await self.card_repo.update(card_id, {
                "balance": new_balance,
                "recipient_time": datetime.now(timezone.utc),
            })
        self.cache.invalidate_all(CARDS)
        logger.info(f"Card {card_id} refilled, balance {card['balance']} -> {new_balance}")
        return updated

    async def toggle_status(self, card_id: int) -> dict:
        card = await self.card_repo.get_by_id(card_id)
        if card is None:
            raise NotFoundException(f"Card with id: {card_id} not found.")
        if is_expired(card):
            raise BadRequestException("Card is expired.")

        if card["status"] == CardStatus.STATUS_CARD_BLOCKED:
            new_status = CardStatus.STATUS_CARD_UNBLOCKED
        else:
            new_status = CardStatus.STATUS_CARD_BLOCKED
        updated = await self.card_repo.update(card_id, {"status": new_status.value})
        self.cache.invalidate_all(CARDS)
        logger.info(f"Card {card_id} status changed to {new_status.value}")
        return updated

    async def change_type(self, card_id: int, card_type: Optional[str]) -> dict:
        card = await self.card_repo.get_by_id(card_id)
        if card is None:
            raise NotFoundException(f"Card with id: {card_id} not found.")
        if is_expired(card):
            raise BadRequestException("Card is expired.")
        if card["status"] == CardStatus.STATUS_CARD_BLOCKED:
            raise BadRequestException("Operation is unavailable for blocked card.")

        chosen_type = parse_card_type(card_type)
        updated = await self.card_repo.update(card_id, {"card_type": chosen_type.value})
        self.cache.invalidate_all(CARDS)
        return updated

    async def delete(self, card_id: int, user_id: int) -> None:
        async with self.card_repo.transaction():
            card = await self.card_repo.get_by_id(card_id)
            if card is None:
                raise NotFoundException(f"Card with id: {card_id} not found.")
            user = await self.user_repo.get_by_id(user_id)
            if user is None:
                raise NotFoundException(f"User with id: {user_id} not found.")
            if Decimal(card["balance"]) != 0 or card["user_id"] != user_id:
                raise BadRequestException("Card is not empty or user does not contain this card.")
            await self.card_repo.delete(card_id)
        self.cache.invalidate_all(CARDS, USERS)
        logger.info(f"Card {card_id} of user {user_id} deleted")
