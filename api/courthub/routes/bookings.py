"""Booking routes: create, query, approve, confirm and cancel."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from courthub.core.database import get_db
from courthub.core.dependencies import ensure_self_or_admin, get_current_user, require_admin
from courthub.core.errors import ForbiddenError, NotFoundError, ValidationError, parse_id
from courthub.models.booking import BookingStatus
from courthub.models.member import User
from courthub.schemas import BookingConfirm, BookingCreate, BookingCreated, BookingOut, DataResponse, MessageResponse
from courthub.services import bookings as booking_service
from courthub.services.bookings import TransitionResult

router = APIRouter(tags=["bookings"])


def _raise_unless_applied(outcome: TransitionResult) -> None:
    # Missing and already-transitioned bookings deliberately share one response.
    if outcome is not TransitionResult.APPLIED:
        raise NotFoundError("Booking not found")


@router.get("/bookings", response_model=DataResponse[list[BookingOut]])
async def list_bookings(
    email: str | None = None,
    booking_status: BookingStatus | None = Query(None, alias="status"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """``?email=`` lists that requester's pending bookings; ``?status=`` lists all bookings in a status (admin)."""
    if email:
        ensure_self_or_admin(user, email)
    elif booking_status and not user.is_admin:
        raise ForbiddenError("Admin access required")

    rows = await booking_service.list_bookings(db, email=email, status=booking_status)
    return {"data": rows}


@router.get("/bookings/approved", response_model=DataResponse[list[BookingOut]])
async def list_approved_bookings(
    email: str | None = None,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not email:
        raise ValidationError("Email is required", fields=["email"])
    ensure_self_or_admin(user, email)

    rows = await booking_service.list_bookings(db, email=email, email_status=BookingStatus.APPROVED)
    return {"data": rows}


@router.get("/bookings/{booking_id}", response_model=DataResponse[BookingOut])
async def get_booking(
    booking_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.get_booking(db, parse_id(booking_id, "Booking"))
    ensure_self_or_admin(user, booking.user_email)
    return {"data": booking}


@router.post("/bookings", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
async def create_booking(
    body: BookingCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.create_booking(
        db,
        court_id=body.court_id,
        user_name=body.user_name,
        booking_date=body.booking_date,
        slots=body.slots,
        price_per_slot=body.price_per_slot,
        user_email=body.user_email,
    )
    return BookingCreated(
        message="Booking created successfully",
        booking_id=booking.id,
        total_price=booking.total_price,
    )


@router.put("/bookings/approve/{booking_id}", response_model=MessageResponse)
async def approve_booking(
    booking_id: str,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    outcome = await booking_service.approve_booking(db, parse_id(booking_id, "Booking"))
    _raise_unless_applied(outcome)
    return MessageResponse(message="Booking approved")


@router.patch("/bookings/confirm/{booking_id}", response_model=MessageResponse)
async def confirm_booking(
    booking_id: str,
    body: BookingConfirm,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not body.transaction_id:
        raise ValidationError("Missing required fields: transaction_id", fields=["transaction_id"])

    booking = await booking_service.get_booking(db, parse_id(booking_id, "Booking"))
    ensure_self_or_admin(user, booking.user_email)

    outcome = await booking_service.confirm_booking(db, booking.id, body.transaction_id)
    _raise_unless_applied(outcome)
    return MessageResponse(message="Booking confirmed")


@router.delete("/bookings/{booking_id}", response_model=MessageResponse)
async def cancel_booking(
    booking_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.get_booking(db, parse_id(booking_id, "Booking"))
    ensure_self_or_admin(user, booking.user_email)

    await booking_service.cancel_booking(db, booking)
    return MessageResponse(message="Booking cancelled successfully")


@router.get("/booking/confirmed", response_model=DataResponse[list[BookingOut]])
async def list_my_confirmed_bookings(
    email: str | None = None,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not email:
        raise ValidationError("Email is required", fields=["email"])
    ensure_self_or_admin(user, email)

    return {"data": await booking_service.list_confirmed(db, email=email)}


@router.get("/admin/confirmed/bookings", response_model=DataResponse[list[BookingOut]])
async def list_all_confirmed_bookings(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await booking_service.list_confirmed(db)}
