"""Court catalog: list, create, partially update and delete courts."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courthub.core.errors import NotFoundError, ValidationError, require_fields
from courthub.models.court import Court

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["name", "court_type", "price", "slots"]


async def list_courts(db: AsyncSession) -> list[Court]:
    result = await db.execute(select(Court).order_by(Court.id))
    return list(result.scalars().all())


async def get_court(db: AsyncSession, court_id: int) -> Court:
    court = await db.get(Court, court_id)
    if court is None:
        raise NotFoundError("Court not found")
    return court


async def create_court(db: AsyncSession, data: dict) -> Court:
    require_fields(data, REQUIRED_FIELDS)
    if data["price"] < 0:
        raise ValidationError("price must not be negative", fields=["price"])

    court = Court(
        name=data["name"],
        court_type=data["court_type"],
        image=data.get("image"),
        price=float(data["price"]),
        slots=list(data["slots"]),
    )
    db.add(court)
    await db.flush()
    logger.info("Court %s created: %s", court.id, court.name)
    return court


async def update_court(db: AsyncSession, court_id: int, changes: dict) -> Court:
    """Replace only the fields present in ``changes``."""
    if not changes:
        raise ValidationError("No fields to update")

    court = await get_court(db, court_id)
    for field, value in changes.items():
        setattr(court, field, value)
    await db.flush()
    return court


async def delete_court(db: AsyncSession, court_id: int) -> None:
    court = await get_court(db, court_id)
    await db.delete(court)
    await db.flush()
    logger.info("Court %s deleted", court_id)
