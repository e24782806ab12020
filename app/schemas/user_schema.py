import re
from datetime import date
from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, Field, EmailStr

from app.db.models.user_model import UserRole, UserStatus, UserVisibility

EMAIL_PATTERN = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,3}$", re.IGNORECASE)
PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Z])(?=.*[0-9\W]).{8,20}$")
PHONE_PATTERN = r"^(\+\d{1,3})?\d{9,15}$"

T = TypeVar("T")


def check_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Email must contain valid tags.")
    return value


def check_password(value: str) -> str:
    if not 8 <= len(value) <= 20:
        raise ValueError("Password should be between 8 and 20 characters")
    if not PASSWORD_PATTERN.match(value):
        raise ValueError("Password must contain at least one uppercase letter and one number or symbol")
    return value


ValidEmail = Annotated[EmailStr, AfterValidator(check_email)]
ValidPassword = Annotated[str, AfterValidator(check_password)]
PhoneNumber = Annotated[str, Field(pattern=PHONE_PATTERN)]


class UserCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=10)
    surname: str = Field(..., min_length=2, max_length=15)
    date_of_birth: date
    country_of_origin: str = Field(..., min_length=1, max_length=60)
    email: ValidEmail
    password: ValidPassword
    phone_number: PhoneNumber


class UserUpdate(BaseModel):
    email: ValidEmail
    password: ValidPassword
    phone_number: PhoneNumber


class EmailUpdate(BaseModel):
    email: ValidEmail


class PasswordUpdate(BaseModel):
    password: ValidPassword


class PhoneNumberUpdate(BaseModel):
    phone_number: PhoneNumber


class RoleUpdate(BaseModel):
    user_role: str = Field(..., min_length=1)


class UserOut(BaseModel):
    id: int
    user_role: UserRole
    status: UserStatus
    visibility: UserVisibility
    name: str
    surname: str
    date_of_birth: date
    country_of_origin: str
    email: str
    avatar: str
    phone_number: str

    model_config = {
        "from_attributes": True
    }


class Page(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    size: int
    sort: Optional[str] = None
