"""Booking lifecycle: create, query, transition and cancel bookings.

Status moves pending -> approved -> confirmed. Cancelling deletes the booking
whatever its status. Approval and payment each touch a second store (users,
payments); those second writes happen after the booking write has been
committed and never undo it.

Known gap: creation does not check the court's slot inventory or existing
bookings, so two requesters can book the same slot.
"""

import enum
import logging
from datetime import date

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from courthub.core.errors import NotFoundError, ValidationError, require_fields
from courthub.models.base import utcnow
from courthub.models.booking import Booking, BookingStatus
from courthub.services.email import notify_booking_approved, notify_booking_confirmed
from courthub.services.users import normalize_email, promote_if_eligible

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["court_id", "slots", "date", "price_per_slot", "user_email"]


class TransitionResult(enum.StrEnum):
    """Outcome of a status transition."""

    APPLIED = "applied"
    UNCHANGED = "unchanged"  # booking exists but is not in a state the transition applies to
    NOT_FOUND = "not_found"


def calc_total_price(slots: list[str], price_per_slot: float) -> float:
    return len(slots) * float(price_per_slot)


async def create_booking(
    db: AsyncSession,
    court_id: int | None,
    user_name: str | None,
    booking_date: date | None,
    slots: list[str] | None,
    price_per_slot: float | None,
    user_email: str | None,
) -> Booking:
    """Persist a new pending booking. Raises ValidationError listing missing fields."""
    require_fields(
        {
            "court_id": court_id,
            "slots": slots,
            "date": booking_date,
            "price_per_slot": price_per_slot,
            "user_email": user_email,
        },
        REQUIRED_FIELDS,
    )

    booking = Booking(
        court_id=court_id,
        user_name=user_name,
        user_email=normalize_email(user_email),
        booking_date=booking_date,
        slots=list(slots),
        price_per_slot=float(price_per_slot),
        total_price=calc_total_price(slots, price_per_slot),
        status=BookingStatus.PENDING,
    )
    db.add(booking)
    await db.flush()

    logger.info("Booking %s created for %s (court %s, %d slots)", booking.id, user_email, court_id, len(slots))
    return booking


async def get_booking(db: AsyncSession, booking_id: int, refresh: bool = False) -> Booking:
    booking = await db.get(Booking, booking_id, populate_existing=refresh)
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


async def list_bookings(
    db: AsyncSession,
    email: str | None = None,
    status: BookingStatus | None = None,
    email_status: BookingStatus = BookingStatus.PENDING,
) -> list[Booking]:
    """List bookings by requester or by status.

    With ``email`` the result is that requester's bookings in ``email_status``
    (pending for the plain listing, approved for the approved listing) and
    ``status`` is ignored. Without it, ``status`` selects every booking in
    that status (admin view).
    """
    if email:
        query = select(Booking).where(Booking.user_email == normalize_email(email), Booking.status == email_status)
    elif status:
        query = select(Booking).where(Booking.status == status)
    else:
        raise ValidationError("Email or status is required", fields=["email", "status"])

    result = await db.execute(query.order_by(Booking.id))
    return list(result.scalars().all())


async def list_confirmed(db: AsyncSession, email: str | None = None) -> list[Booking]:
    """Confirmed bookings, most recently paid first. All requesters when email is None."""
    query = select(Booking).where(Booking.status == BookingStatus.CONFIRMED)
    if email:
        query = query.where(Booking.user_email == normalize_email(email))
    result = await db.execute(query.order_by(Booking.paid_at.desc(), Booking.id.desc()))
    return list(result.scalars().all())


async def _transition(
    db: AsyncSession,
    booking_id: int,
    from_statuses: tuple[BookingStatus, ...],
    values: dict,
) -> TransitionResult:
    """Conditionally update one booking and report what happened.

    The status guard is part of the UPDATE itself so concurrent callers cannot
    both apply the same transition.
    """
    result = await db.execute(
        update(Booking)
        .where(Booking.id == booking_id, Booking.status.in_(from_statuses))
        .values(**values, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount:
        return TransitionResult.APPLIED

    exists = await db.scalar(select(Booking.id).where(Booking.id == booking_id))
    return TransitionResult.UNCHANGED if exists else TransitionResult.NOT_FOUND


async def approve_booking(db: AsyncSession, booking_id: int) -> TransitionResult:
    """Approve a pending booking, then promote its requester.

    The approval is committed before the promotion runs; a failed promotion is
    logged and leaves the approval in place.
    """
    outcome = await _transition(
        db, booking_id, (BookingStatus.PENDING,), {"status": BookingStatus.APPROVED}
    )
    if outcome is not TransitionResult.APPLIED:
        return outcome

    await db.commit()
    booking = await get_booking(db, booking_id, refresh=True)
    logger.info("Booking %s approved", booking_id)

    email = booking.user_email
    try:
        await promote_if_eligible(db, email)
        await db.commit()
    except Exception:
        await db.rollback()
        logger.warning("Promotion failed for %s after approving booking %s", email, booking_id, exc_info=True)
        # rollback expired the instance; the approval itself is already committed
        await db.refresh(booking)

    await notify_booking_approved(booking)
    return outcome


async def confirm_booking(db: AsyncSession, booking_id: int, transaction_id: str | None) -> TransitionResult:
    """Mark a booking as paid.

    Prior approval is not required: any booking that is not already confirmed
    can be confirmed.
    """
    outcome = await _transition(
        db,
        booking_id,
        (BookingStatus.PENDING, BookingStatus.APPROVED),
        {"status": BookingStatus.CONFIRMED, "transaction_id": transaction_id, "paid_at": utcnow()},
    )
    if outcome is TransitionResult.APPLIED:
        await db.commit()
        booking = await get_booking(db, booking_id, refresh=True)
        logger.info("Booking %s confirmed (transaction %s)", booking_id, transaction_id)
        await notify_booking_confirmed(booking)
    return outcome


async def cancel_booking(db: AsyncSession, booking: Booking) -> None:
    """Delete a booking in any status."""
    booking_id, status = booking.id, booking.status
    await db.delete(booking)
    await db.flush()
    logger.info("Booking %s cancelled (was %s)", booking_id, status)
