from sqlalchemy import Column, Integer, Numeric, ForeignKey, DateTime, String, func
from app.db.base import Base


class Transfer(Base):
    __tablename__ = "transfers"

    id = Column(Integer, primary_key=True, index=True)
    reference_number = Column(String(36), unique=True, nullable=False, index=True)
    sender_card_id = Column(Integer, ForeignKey("cards.id", ondelete="SET NULL"), nullable=True)
    receiver_card_id = Column(Integer, ForeignKey("cards.id", ondelete="SET NULL"), nullable=True)
    amount = Column(Numeric(18, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    description = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
