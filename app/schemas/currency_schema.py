from decimal import Decimal
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class CurrencyDataOut(BaseModel):
    id: int
    currency: str
    rate: Decimal
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
