"""Coupon model: a discount code with an active flag and optional expiry."""

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from courthub.models.base import Base, TimestampMixin, as_utc, utcnow


class DiscountType(enum.StrEnum):
    PERCENT = "percent"
    FIXED = "fixed"


class Coupon(TimestampMixin, Base):
    __tablename__ = "coupons"

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)  # always upper case
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    discount: Mapped[float] = mapped_column(Float, nullable=False)
    discount_type: Mapped[DiscountType] = mapped_column(
        Enum(DiscountType, name="discount_type", values_callable=lambda e: [x.value for x in e]),
        default=DiscountType.PERCENT,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    def is_valid(self, now: datetime | None = None) -> bool:
        now = now or utcnow()
        expires_at = as_utc(self.expires_at)
        return self.is_active and (expires_at is None or expires_at > now)

    def __repr__(self) -> str:
        return f"<Coupon {self.code}>"
