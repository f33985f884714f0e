"""Court routes. Reads are public; changes require an admin."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from courthub.core.database import get_db
from courthub.core.dependencies import require_admin
from courthub.core.errors import parse_id
from courthub.models.member import User
from courthub.schemas import Created, CourtCreate, CourtOut, CourtUpdate, DataResponse, MessageResponse
from courthub.services import courts as court_service

router = APIRouter(tags=["courts"])


@router.get("/courts", response_model=DataResponse[list[CourtOut]])
async def list_courts(db: AsyncSession = Depends(get_db)):
    return {"data": await court_service.list_courts(db)}


@router.get("/courts/{court_id}", response_model=DataResponse[CourtOut])
async def get_court(court_id: str, db: AsyncSession = Depends(get_db)):
    return {"data": await court_service.get_court(db, parse_id(court_id, "Court"))}


@router.post("/create/courts", response_model=Created, status_code=status.HTTP_201_CREATED)
async def create_court(
    body: CourtCreate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    court = await court_service.create_court(db, body.model_dump())
    return Created(message="Court created", id=court.id)


@router.patch("/update/courts/{court_id}", response_model=DataResponse[CourtOut])
async def update_court(
    court_id: str,
    body: CourtUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    court = await court_service.update_court(db, parse_id(court_id, "Court"), changes)
    return {"data": court}


@router.delete("/courts/{court_id}", response_model=MessageResponse)
async def delete_court(
    court_id: str,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await court_service.delete_court(db, parse_id(court_id, "Court"))
    return MessageResponse(message="Court deleted")
