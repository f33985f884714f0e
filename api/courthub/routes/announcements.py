"""Announcement routes. Anyone can read; admins write."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from courthub.core.database import get_db
from courthub.core.dependencies import require_admin
from courthub.core.errors import parse_id
from courthub.models.member import User
from courthub.schemas import AnnouncementIn, AnnouncementOut, Created, DataResponse, MessageResponse
from courthub.services import announcements as announcement_service

router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.get("", response_model=DataResponse[list[AnnouncementOut]])
async def list_announcements(db: AsyncSession = Depends(get_db)):
    return {"data": await announcement_service.list_announcements(db)}


@router.post("", response_model=Created, status_code=status.HTTP_201_CREATED)
async def create_announcement(
    body: AnnouncementIn,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    announcement = await announcement_service.create_announcement(db, body.title, body.message)
    return Created(message="Announcement created", id=announcement.id)


@router.patch("/{announcement_id}", response_model=DataResponse[AnnouncementOut])
async def update_announcement(
    announcement_id: str,
    body: AnnouncementIn,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    announcement = await announcement_service.update_announcement(
        db, parse_id(announcement_id, "Announcement"), changes
    )
    return {"data": announcement}


@router.delete("/{announcement_id}", response_model=MessageResponse)
async def delete_announcement(
    announcement_id: str,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await announcement_service.delete_announcement(db, parse_id(announcement_id, "Announcement"))
    return MessageResponse(message="Announcement deleted")
