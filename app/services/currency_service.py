# app/services/currency_service.py

import logging

from app.core.exceptions import NotFoundException
from app.db.models.card_model import Currency
from app.repositories.currency_repo import CurrencyDataRepository
from app.services.currency_client import CurrencyRateClient

logger = logging.getLogger(__name__)

SUPPORTED_CURRENCIES = [currency.value for currency in Currency]


class CurrencyDataService:
    def __init__(self, currency_repo: CurrencyDataRepository, client: CurrencyRateClient):
        self.currency_repo = currency_repo
        self.client = client

    async def refresh(self) -> list[dict]:
        """Fetch fresh rates and overwrite every stored one."""
        rates = await self.client.fetch_rates(SUPPORTED_CURRENCIES)
        rows = await self.currency_repo.replace_all(rates)
        logger.info(f"Currency data refreshed: {', '.join(sorted(rates))}")
        return rows

    async def find_all(self) -> list[dict]:
        return await self.currency_repo.list_all()

    async def find(self, code: str) -> dict:
        normalized = (code or "").strip().upper()
        if normalized not in SUPPORTED_CURRENCIES:
            raise NotFoundException(f"Currency {code} not found.")
        row = await self.currency_repo.get_by_currency(normalized)
        if row is None:
            raise NotFoundException(f"Currency {code} not found.")
        return row
