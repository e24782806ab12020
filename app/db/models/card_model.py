import enum

from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, Date, DateTime, Enum, func
from sqlalchemy.orm import relationship
from app.db.base import Base


class Currency(str, enum.Enum):
    USD = "USD"
    EUR = "EUR"
    UAH = "UAH"
    CZK = "CZK"
    PLN = "PLN"


class CardType(str, enum.Enum):
    VISA = "VISA"
    MASTERCARD = "MASTERCARD"


class CardStatus(str, enum.Enum):
    STATUS_CARD_DEFAULT = "STATUS_CARD_DEFAULT"
    STATUS_CARD_BLOCKED = "STATUS_CARD_BLOCKED"
    STATUS_CARD_UNBLOCKED = "STATUS_CARD_UNBLOCKED"


class Card(Base):
    __tablename__ = "cards"

    id = Column(Integer, primary_key=True, index=True)
    card_number = Column(String(16), unique=True, nullable=False, index=True)
    cvv = Column(Integer, nullable=False)
    pin = Column(Integer, nullable=False)
    balance = Column(Numeric(18, 2), default=0, nullable=False)
    holder_name = Column(String(30), nullable=False)
    iban = Column(String(34), nullable=False)
    swift = Column(String(11), nullable=False)
    account_number = Column(String(10), nullable=False)
    currency_type = Column(Enum(Currency, name="currency"), nullable=False)
    card_type = Column(Enum(CardType, name="cardtype"), nullable=False)
    status = Column(Enum(CardStatus, name="cardstatus"), default=CardStatus.STATUS_CARD_DEFAULT, nullable=False)
    card_expiration_date = Column(Date, nullable=False)
    recipient_time = Column(DateTime(timezone=True), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("User", back_populates="cards")

    def __repr__(self):
        return f"<Card(number={self.card_number}, balance={self.balance} {self.currency_type})>"
