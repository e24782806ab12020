# app/services/currency_client.py

import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

import httpx

from app.core.config import settings
from app.core.exceptions import CurrencySourceException

logger = logging.getLogger(__name__)


class CurrencyRateClient:
    """Fetches latest exchange rates from the configured HTTP source.

    The source answers ``GET {base_url}/{base}`` with ``{"rates": {"EUR": 0.92, ...}}``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        base_currency: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.CURRENCY_API_URL).rstrip("/")
        self.base_currency = base_currency or settings.CURRENCY_BASE
        self.timeout = timeout if timeout is not None else settings.CURRENCY_API_TIMEOUT
        self.transport = transport

    async def fetch_rates(self, currencies: Iterable[str]) -> dict[str, Decimal]:
        url = f"{self.base_url}/{self.base_currency}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Currency source request failed: {e}")
            raise CurrencySourceException("Currency rate source is unavailable.")
        except ValueError:
            raise CurrencySourceException("Currency rate source returned malformed data.")

        rates = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(rates, dict):
            raise CurrencySourceException("Currency rate source returned malformed data.")

        result = {}
        for code in currencies:
            if code not in rates:
                raise CurrencySourceException(f"Currency rate source has no rate for {code}.")
            try:
                result[code] = Decimal(str(rates[code]))
            except InvalidOperation:
                raise CurrencySourceException(f"Currency rate source returned invalid rate for {code}.")
        logger.info(f"Fetched {len(result)} rates against {self.base_currency}")
        return result
