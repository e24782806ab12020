from decimal import Decimal
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TransferOut(BaseModel):
    id: int
    reference_number: str
    sender_card_id: Optional[int]
    receiver_card_id: Optional[int]
    amount: Decimal
    currency: str
    description: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
