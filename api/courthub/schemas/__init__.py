"""Pydantic schemas for API serialisation.

Create payloads keep every required field optional at the schema level: the
services check presence themselves so a failure can list every missing
field at once.
"""

from datetime import date, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T


class MessageResponse(BaseModel):
    success: bool = True
    message: str


# --- Auth ---


class TokenRequest(BaseModel):
    email: EmailStr


class TokenResponse(BaseModel):
    success: bool = True
    token: str
    token_type: str = "bearer"


# --- User ---


class UserCreate(BaseModel):
    name: str | None = None
    email: EmailStr | None = None
    image: str | None = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    image: str | None
    role: str
    member_since: datetime | None
    created_at: datetime


class UserCreated(BaseModel):
    success: bool = True
    message: str
    user_id: int


class RoleOut(BaseModel):
    success: bool = True
    role: str


# --- Court ---


class CourtCreate(BaseModel):
    name: str | None = None
    court_type: str | None = None
    image: str | None = None
    price: float | None = None
    slots: list[str] | None = None


class CourtUpdate(BaseModel):
    name: str | None = None
    court_type: str | None = None
    image: str | None = None
    price: float | None = Field(default=None, ge=0)
    slots: list[str] | None = None


class CourtOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    court_type: str
    image: str | None
    price: float
    slots: list[str]


# --- Booking ---


class BookingCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    court_id: int | None = None
    user_name: str | None = None
    user_email: EmailStr | None = None
    booking_date: date | None = Field(default=None, alias="date")
    slots: list[str] | None = None
    price_per_slot: float | None = Field(default=None, ge=0)


class BookingConfirm(BaseModel):
    transaction_id: str | None = None


class BookingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    court_id: int
    user_name: str | None
    user_email: str
    booking_date: date
    slots: list[str]
    price_per_slot: float
    total_price: float
    status: str
    transaction_id: str | None
    paid_at: datetime | None
    created_at: datetime


class BookingCreated(BaseModel):
    success: bool = True
    message: str
    booking_id: int
    total_price: float


# --- Payment ---


class PaymentCreate(BaseModel):
    booking_id: int | None = None
    email: EmailStr | None = None
    amount: float | None = Field(default=None, ge=0)
    transaction_id: str | None = None


class PaymentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    booking_id: int
    email: str
    amount: float
    transaction_id: str | None
    paid_at: datetime


class PaymentSaved(BaseModel):
    success: bool = True
    message: str
    payment_id: int
    booking_confirmed: bool


class PaymentIntentRequest(BaseModel):
    total_price: float = Field(gt=0)


class PaymentIntentOut(BaseModel):
    success: bool = True
    client_secret: str


# --- Coupon ---


class CouponIn(BaseModel):
    code: str | None = None
    name: str | None = None
    discount: float | None = Field(default=None, ge=0)
    discount_type: str = "percent"
    is_active: bool = True
    expires_at: datetime | None = None


class CouponOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str
    discount: float
    discount_type: str
    is_active: bool
    expires_at: datetime | None


class CouponValidation(BaseModel):
    success: bool = True
    code: str
    discount: float
    discount_type: str


# --- Announcement ---


class AnnouncementIn(BaseModel):
    title: str | None = None
    message: str | None = None


class AnnouncementOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    message: str
    created_at: datetime
    updated_at: datetime


class Created(BaseModel):
    success: bool = True
    message: str
    id: int
