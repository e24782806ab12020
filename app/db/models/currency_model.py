from sqlalchemy import Column, Integer, String, Numeric, DateTime, func
from app.db.base import Base


class CurrencyData(Base):
    __tablename__ = "currency_data"

    id = Column(Integer, primary_key=True, index=True)
    currency = Column(String(3), unique=True, nullable=False, index=True)
    rate = Column(Numeric(18, 6), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
