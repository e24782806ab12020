# app/schemas/card_schema.py

from decimal import Decimal
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, condecimal

from app.db.models.card_model import Currency, CardType, CardStatus

PositiveDecimal = condecimal(gt=0, max_digits=16, decimal_places=2)


class CardCreate(BaseModel):
    currency: str
    type: str


class CardRefill(BaseModel):
    pin: int = Field(..., ge=1000, le=9999)
    amount: PositiveDecimal = Field(...)


class CardTypeUpdate(BaseModel):
    type: str


class CardOut(BaseModel):
    """Card as returned to its owner and to staff."""
    id: int
    card_number: str
    cvv: int
    pin: int
    balance: Decimal
    holder_name: str
    iban: str
    swift: str
    account_number: str
    currency_type: Currency
    card_type: CardType
    status: CardStatus
    card_expiration_date: date
    recipient_time: Optional[datetime] = None
    user_id: int

    model_config = {
        "from_attributes": True
    }
