"""Booking model.

A booking reserves one or more slots at a court on a given date. Its status
moves pending -> approved -> confirmed; cancelling deletes the row.

Bookings hold references only (court id, requester email). There is no
uniqueness constraint on (court, date, slot): two requesters can hold
pending bookings for the same slot until an admin resolves it.
"""

import enum
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Enum, Float, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from courthub.models.base import Base, TimestampMixin, json_type


class BookingStatus(enum.StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    CONFIRMED = "confirmed"


class Booking(TimestampMixin, Base):
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(primary_key=True)
    court_id: Mapped[int] = mapped_column(nullable=False, index=True)

    # Requester
    user_name: Mapped[str | None] = mapped_column(String(200))
    user_email: Mapped[str] = mapped_column(String(254), nullable=False)

    # When
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    slots: Mapped[list] = mapped_column(json_type, nullable=False)

    # Price is fixed at creation: len(slots) * price_per_slot
    price_per_slot: Mapped[float] = mapped_column(Float, nullable=False)
    total_price: Mapped[float] = mapped_column(Float, nullable=False)

    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, name="booking_status", values_callable=lambda e: [x.value for x in e]),
        default=BookingStatus.PENDING,
        nullable=False,
    )

    # Set on confirmation
    transaction_id: Mapped[str | None] = mapped_column(String(100))
    paid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    __table_args__ = (
        # "My bookings in status X" and the admin status views
        Index("ix_bookings_email_status", "user_email", "status"),
        Index("ix_bookings_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<Booking {self.id} court={self.court_id} {self.booking_date} {self.status}>"
