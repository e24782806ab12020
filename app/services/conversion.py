# app/services/conversion.py
"""Refill conversion into a card's currency.

USD cards scale the whole resulting balance by the rate, every other currency
scales only the incoming amount. Both rules are kept as they are observed in
production data; do not merge them without confirming the intended semantics.
"""

from decimal import Decimal, ROUND_DOWN
from typing import Callable, Dict

from app.db.models.card_model import Currency

CENT = Decimal("0.01")


def _scale_total(balance: Decimal, amount: Decimal, rate: Decimal) -> Decimal:
    return (balance + amount) * rate


def _scale_incoming(balance: Decimal, amount: Decimal, rate: Decimal) -> Decimal:
    return balance + amount * rate


REFILL_RULES: Dict[Currency, Callable[[Decimal, Decimal, Decimal], Decimal]] = {
    Currency.USD: _scale_total,
    Currency.EUR: _scale_incoming,
    Currency.UAH: _scale_incoming,
    Currency.CZK: _scale_incoming,
    Currency.PLN: _scale_incoming,
}


def convert_refill(currency: Currency | str, balance, amount, rate) -> Decimal:
    rule = REFILL_RULES[Currency(currency)]
    result = rule(Decimal(str(balance)), Decimal(str(amount)), Decimal(str(rate)))
    return result.quantize(CENT, rounding=ROUND_DOWN)
