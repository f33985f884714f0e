"""All models imported here so Base.metadata sees every table."""

from courthub.models.announcement import Announcement
from courthub.models.base import Base
from courthub.models.booking import Booking, BookingStatus
from courthub.models.coupon import Coupon, DiscountType
from courthub.models.court import Court
from courthub.models.member import User, UserRole
from courthub.models.payment import Payment

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Court",
    "Booking",
    "BookingStatus",
    "Payment",
    "Coupon",
    "DiscountType",
    "Announcement",
]
