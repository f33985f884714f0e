"""User store: registration, role lookup and automatic promotion to member."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courthub.core.errors import ConflictError, NotFoundError, require_fields
from courthub.models.base import utcnow
from courthub.models.member import User, UserRole

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Emails are stored and matched lower case."""
    return email.strip().lower()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def register_user(db: AsyncSession, name: str | None, email: str | None, image: str | None = None) -> User:
    require_fields({"name": name, "email": email}, ["name", "email"])

    if await get_user_by_email(db, email):
        raise ConflictError("User already exists")

    user = User(name=name, email=normalize_email(email), image=image, role=UserRole.USER)
    db.add(user)
    await db.flush()

    logger.info("Registered user %s", email)
    return user


async def get_user(db: AsyncSession, email: str) -> User:
    user = await get_user_by_email(db, email)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def get_role(db: AsyncSession, email: str) -> UserRole:
    user = await get_user(db, email)
    return user.role or UserRole.USER


async def promote_if_eligible(db: AsyncSession, email: str) -> bool:
    """Promote a plain user to member, stamping the membership date.

    Members, admins and unknown emails are left alone, so calling this again
    after a promotion does nothing. Returns True when a promotion happened.
    """
    user = await get_user_by_email(db, email)
    if user is None or user.role != UserRole.USER:
        return False

    user.role = UserRole.MEMBER
    user.member_since = utcnow()
    await db.flush()

    logger.info("Promoted %s to member", email)
    return True


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.id))
    return list(result.scalars().all())


async def list_members(db: AsyncSession, name: str | None = None) -> list[User]:
    """Users holding the member role, optionally filtered by a name fragment (case-insensitive)."""
    query = select(User).where(User.role == UserRole.MEMBER)
    if name:
        query = query.where(User.name.ilike(f"%{name}%"))
    result = await db.execute(query.order_by(User.member_since, User.id))
    return list(result.scalars().all())


async def delete_user(db: AsyncSession, user_id: int) -> None:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    await db.delete(user)
    await db.flush()
    logger.info("Deleted user %s", user_id)
