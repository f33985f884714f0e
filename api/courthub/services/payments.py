"""Payment ledger: record completed payments and confirm the booking they paid for.

The payment row is committed first. Confirming the booking is a second,
separate write; if the booking does not end up confirmed the payment stays
recorded and the gap is logged so it can be reconciled by hand.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courthub.core.errors import require_fields
from courthub.models.booking import Booking, BookingStatus
from courthub.models.payment import Payment
from courthub.services.bookings import TransitionResult, confirm_booking
from courthub.services.users import normalize_email

logger = logging.getLogger(__name__)


async def record_payment(
    db: AsyncSession,
    booking_id: int | None,
    email: str | None,
    amount: float | None,
    transaction_id: str | None = None,
) -> tuple[Payment, bool]:
    """Append a payment and confirm its booking. Returns (payment, booking_confirmed).

    A booking that was already confirmed, for example through the confirm
    endpoint just before the payment is recorded, counts as confirmed.
    """
    require_fields({"booking_id": booking_id, "email": email, "amount": amount}, ["booking_id", "email", "amount"])

    payment = Payment(
        booking_id=booking_id,
        email=normalize_email(email),
        amount=float(amount),
        transaction_id=transaction_id,
    )
    db.add(payment)
    await db.commit()
    logger.info("Payment %s recorded for booking %s (%s)", payment.id, booking_id, amount)

    outcome = await confirm_booking(db, booking_id, transaction_id)
    confirmed = outcome is TransitionResult.APPLIED
    if outcome is TransitionResult.UNCHANGED:
        status = await db.scalar(select(Booking.status).where(Booking.id == booking_id))
        confirmed = status == BookingStatus.CONFIRMED

    if not confirmed:
        logger.warning("Payment %s recorded but booking %s was not confirmed (%s)", payment.id, booking_id, outcome)
    return payment, confirmed


async def list_payments(db: AsyncSession, email: str) -> list[Payment]:
    result = await db.execute(
        select(Payment)
        .where(Payment.email == normalize_email(email))
        .order_by(Payment.paid_at.desc(), Payment.id.desc())
    )
    return list(result.scalars().all())
