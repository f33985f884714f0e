"""Payment routes: record completed payments, payment history and Stripe payment intents."""

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from courthub.core.database import get_db
from courthub.core.dependencies import ensure_self_or_admin, get_current_user
from courthub.core.errors import ValidationError
from courthub.models.booking import Booking
from courthub.models.member import User
from courthub.schemas import (
    DataResponse,
    PaymentCreate,
    PaymentIntentOut,
    PaymentIntentRequest,
    PaymentOut,
    PaymentSaved,
)
from courthub.services.payments import list_payments, record_payment
from courthub.services.stripe_service import create_payment_intent

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/save", response_model=PaymentSaved, status_code=status.HTTP_201_CREATED)
async def save_payment(
    body: PaymentCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Record a payment filed under the caller's email against one of their own bookings."""
    if body.email:
        ensure_self_or_admin(user, body.email)
    if body.booking_id is not None:
        booking = await db.get(Booking, body.booking_id)
        if booking is not None:
            ensure_self_or_admin(user, booking.user_email)

    payment, confirmed = await record_payment(
        db,
        booking_id=body.booking_id,
        email=body.email,
        amount=body.amount,
        transaction_id=body.transaction_id,
    )
    return PaymentSaved(
        message="Payment saved" if confirmed else "Payment saved; booking could not be confirmed",
        payment_id=payment.id,
        booking_confirmed=confirmed,
    )


@router.get("", response_model=DataResponse[list[PaymentOut]])
async def payment_history(
    email: str | None = None,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not email:
        raise ValidationError("Email is required", fields=["email"])
    ensure_self_or_admin(user, email)

    return {"data": await list_payments(db, email)}


@router.post("/create-payment-intent", response_model=PaymentIntentOut)
async def payment_intent(body: PaymentIntentRequest, user: User = Depends(get_current_user)):
    # The Stripe SDK is synchronous
    client_secret = await run_in_threadpool(create_payment_intent, body.total_price)
    return PaymentIntentOut(client_secret=client_secret)
