"""Announcements: plain admin-managed notices."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courthub.core.errors import NotFoundError, ValidationError, require_fields
from courthub.models.announcement import Announcement


async def list_announcements(db: AsyncSession) -> list[Announcement]:
    result = await db.execute(select(Announcement).order_by(Announcement.created_at.desc(), Announcement.id.desc()))
    return list(result.scalars().all())


async def create_announcement(db: AsyncSession, title: str | None, message: str | None) -> Announcement:
    require_fields({"title": title, "message": message}, ["title", "message"])
    announcement = Announcement(title=title, message=message)
    db.add(announcement)
    await db.flush()
    return announcement


async def update_announcement(db: AsyncSession, announcement_id: int, changes: dict) -> Announcement:
    if not changes:
        raise ValidationError("No fields to update")

    announcement = await db.get(Announcement, announcement_id)
    if announcement is None:
        raise NotFoundError("Announcement not found")
    for field, value in changes.items():
        setattr(announcement, field, value)
    await db.flush()
    return announcement


async def delete_announcement(db: AsyncSession, announcement_id: int) -> None:
    announcement = await db.get(Announcement, announcement_id)
    if announcement is None:
        raise NotFoundError("Announcement not found")
    await db.delete(announcement)
    await db.flush()
