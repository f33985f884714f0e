"""Coupon store: admin CRUD and code validation.

Codes are stored upper case and matched case-insensitively. A coupon is
valid while it is active and not past its expiry.
"""

import logging
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from courthub.core.errors import ConflictError, NotFoundError, ValidationError, require_fields
from courthub.models.coupon import Coupon, DiscountType

logger = logging.getLogger(__name__)


def normalize_code(code: str) -> str:
    return code.strip().upper()


def _discount_type(value: str | None) -> DiscountType:
    try:
        return DiscountType(value or DiscountType.PERCENT)
    except ValueError:
        raise ValidationError(
            f"discount_type must be one of: {', '.join(t.value for t in DiscountType)}"
        ) from None


async def _ensure_code_free(db: AsyncSession, code: str, exclude_id: int | None = None) -> None:
    query = select(Coupon.id).where(Coupon.code == code)
    if exclude_id is not None:
        query = query.where(Coupon.id != exclude_id)
    if await db.scalar(query):
        raise ConflictError(f"Coupon code {code} already exists")


async def list_coupons(db: AsyncSession) -> list[Coupon]:
    result = await db.execute(select(Coupon).order_by(Coupon.id))
    return list(result.scalars().all())


async def create_coupon(
    db: AsyncSession,
    code: str | None,
    name: str | None,
    discount: float | None,
    discount_type: str | None = None,
    is_active: bool = True,
    expires_at: datetime | None = None,
) -> Coupon:
    require_fields({"code": code, "name": name, "discount": discount}, ["code", "name", "discount"])
    code = normalize_code(code)
    await _ensure_code_free(db, code)

    coupon = Coupon(
        code=code,
        name=name,
        discount=float(discount),
        discount_type=_discount_type(discount_type),
        is_active=is_active,
        expires_at=expires_at,
    )
    db.add(coupon)
    await db.flush()
    logger.info("Coupon %s created", code)
    return coupon


async def update_coupon(
    db: AsyncSession,
    coupon_id: int,
    code: str | None = None,
    name: str | None = None,
    discount: float | None = None,
    **changes,
) -> Coupon:
    """Update a coupon.

    code, name and a numeric discount are always required. discount_type,
    is_active and expires_at only change when they appear in ``changes``.
    """
    require_fields({"code": code, "name": name, "discount": discount}, ["code", "name", "discount"])

    coupon = await db.get(Coupon, coupon_id)
    if coupon is None:
        raise NotFoundError("Coupon not found")

    code = normalize_code(code)
    await _ensure_code_free(db, code, exclude_id=coupon_id)

    coupon.code = code
    coupon.name = name
    coupon.discount = float(discount)
    if "discount_type" in changes:
        coupon.discount_type = _discount_type(changes["discount_type"])
    if "is_active" in changes:
        coupon.is_active = changes["is_active"]
    if "expires_at" in changes:
        coupon.expires_at = changes["expires_at"]
    await db.flush()
    return coupon


async def delete_coupon(db: AsyncSession, coupon_id: int) -> None:
    coupon = await db.get(Coupon, coupon_id)
    if coupon is None:
        raise NotFoundError("Coupon not found")
    await db.delete(coupon)
    await db.flush()


async def validate_coupon(db: AsyncSession, code: str | None) -> Coupon:
    """Return the active, unexpired coupon for ``code`` or raise NotFoundError."""
    if not code or not code.strip():
        raise ValidationError("Coupon code is required", fields=["code"])

    result = await db.execute(select(Coupon).where(func.upper(Coupon.code) == normalize_code(code)))
    coupon = result.scalar_one_or_none()
    if coupon is None or not coupon.is_valid():
        raise NotFoundError("Invalid or expired coupon")
    return coupon
