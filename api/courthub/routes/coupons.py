"""Coupon routes: admin CRUD plus code validation for signed-in users."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from courthub.core.database import get_db
from courthub.core.dependencies import get_current_user, require_admin
from courthub.core.errors import parse_id
from courthub.models.member import User
from courthub.schemas import CouponIn, CouponOut, CouponValidation, Created, DataResponse, MessageResponse
from courthub.services import coupons as coupon_service

router = APIRouter(prefix="/coupons", tags=["coupons"])


@router.get("", response_model=DataResponse[list[CouponOut]])
async def list_coupons(admin: User = Depends(require_admin), db: AsyncSession = Depends(get_db)):
    return {"data": await coupon_service.list_coupons(db)}


@router.get("/validate", response_model=CouponValidation)
async def validate_coupon(
    code: str | None = None,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    coupon = await coupon_service.validate_coupon(db, code)
    return CouponValidation(code=coupon.code, discount=coupon.discount, discount_type=coupon.discount_type)


@router.post("", response_model=Created, status_code=status.HTTP_201_CREATED)
async def create_coupon(
    body: CouponIn,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    coupon = await coupon_service.create_coupon(db, **body.model_dump())
    return Created(message="Coupon created", id=coupon.id)


@router.patch("/{coupon_id}", response_model=DataResponse[CouponOut])
async def update_coupon(
    coupon_id: str,
    body: CouponIn,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    # Fields left out of the request keep their stored values
    changes = body.model_dump(exclude_unset=True)
    coupon = await coupon_service.update_coupon(db, parse_id(coupon_id, "Coupon"), **changes)
    return {"data": coupon}


@router.delete("/{coupon_id}", response_model=MessageResponse)
async def delete_coupon(
    coupon_id: str,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await coupon_service.delete_coupon(db, parse_id(coupon_id, "Coupon"))
    return MessageResponse(message="Coupon deleted")
