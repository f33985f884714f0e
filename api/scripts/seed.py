"""Seed the database with demo courts, users, a coupon and an announcement.

Run with: python -m scripts.seed
Safe to re-run: existing rows (matched by name, email or code) are left alone.
"""

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courthub.core.database import database
from courthub.models import Announcement, Coupon, Court, DiscountType, User, UserRole

HOURLY = [f"{hour:02d}:00" for hour in range(7, 21)]

COURTS = [
    {"name": "Centre Court", "court_type": "tennis", "price": 25.0, "slots": HOURLY},
    {"name": "Court 2", "court_type": "tennis", "price": 20.0, "slots": HOURLY},
    {"name": "Hall A", "court_type": "badminton", "price": 15.0, "slots": HOURLY[2:-2]},
    {"name": "Glass Court", "court_type": "squash", "price": 12.0, "slots": HOURLY},
]

USERS = [
    {"name": "Admin", "email": "admin@courthub.io", "role": UserRole.ADMIN},
    {"name": "Test User", "email": "user@example.com", "role": UserRole.USER},
]


async def _seed_courts(db: AsyncSession) -> int:
    created = 0
    for row in COURTS:
        exists = await db.scalar(select(Court.id).where(Court.name == row["name"]))
        if exists:
            continue
        db.add(Court(**row))
        created += 1
    return created


async def _seed_users(db: AsyncSession) -> int:
    created = 0
    for row in USERS:
        exists = await db.scalar(select(User.id).where(User.email == row["email"]))
        if exists:
            continue
        db.add(User(**row))
        created += 1
    return created


async def seed() -> None:
    await database.create_all()

    async with database.session_factory() as db:
        courts = await _seed_courts(db)
        users = await _seed_users(db)

        if not await db.scalar(select(Coupon.id).where(Coupon.code == "WELCOME10")):
            db.add(Coupon(code="WELCOME10", name="Welcome discount", discount=10, discount_type=DiscountType.PERCENT))

        if not await db.scalar(select(Announcement.id)):
            db.add(Announcement(title="Welcome", message="Courts are open 07:00-21:00 every day."))

        await db.commit()

    await database.dispose()

    print(f"Seeded: {courts} courts, {users} users")
    print("  admin@courthub.io (admin)")
    print("  user@example.com (user)")


if __name__ == "__main__":
    asyncio.run(seed())
