import enum

from sqlalchemy import Column, Integer, String, Date, Enum, ForeignKey, Numeric, Table, DateTime
from sqlalchemy.orm import relationship
from app.db.base import Base


class UserRole(str, enum.Enum):
    ROLE_USER = "ROLE_USER"
    ROLE_ADMIN = "ROLE_ADMIN"
    ROLE_MODERATOR = "ROLE_MODERATOR"


class UserStatus(str, enum.Enum):
    STATUS_DEFAULT = "STATUS_DEFAULT"
    STATUS_BLOCKED = "STATUS_BLOCKED"
    STATUS_UNBLOCKED = "STATUS_UNBLOCKED"


class UserVisibility(str, enum.Enum):
    STATUS_ONLINE = "STATUS_ONLINE"
    STATUS_OFFLINE = "STATUS_OFFLINE"


user_currency_data = Table(
    "user_currency_data",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("currency_data_id", Integer, ForeignKey("currency_data.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    user_role = Column(Enum(UserRole, name="userrole"), default=UserRole.ROLE_USER, nullable=False)
    status = Column(Enum(UserStatus, name="userstatus"), default=UserStatus.STATUS_DEFAULT, nullable=False)
    visibility = Column(Enum(UserVisibility, name="uservisibility"), default=UserVisibility.STATUS_ONLINE,
                        nullable=False)
    name = Column(String(10), nullable=False)
    surname = Column(String(15), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    country_of_origin = Column(String(60), nullable=False)
    email = Column(String(120), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    avatar = Column(String(512), nullable=False)
    phone_number = Column(String(20), nullable=False)

    cards = relationship("Card", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
    sent_messages = relationship("Message", foreign_keys="[Message.sender_id]", back_populates="sender",
                                 cascade="all, delete-orphan", passive_deletes=True)
    received_messages = relationship("Message", foreign_keys="[Message.receiver_id]", back_populates="receiver",
                                     cascade="all, delete-orphan", passive_deletes=True)
    bank_loan = relationship("BankLoan", back_populates="user", uselist=False,
                             cascade="all, delete-orphan", passive_deletes=True)
    currency_data = relationship("CurrencyData", secondary=user_currency_data)


class BankLoan(Base):
    __tablename__ = "bank_loans"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="bank_loan")
