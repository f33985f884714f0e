"""User routes: registration, role lookup and admin user management."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from courthub.core.database import get_db
from courthub.core.dependencies import ensure_self_or_admin, get_current_user, require_admin
from courthub.core.errors import parse_id
from courthub.models.member import User
from courthub.schemas import DataResponse, MessageResponse, RoleOut, UserCreate, UserCreated, UserOut
from courthub.services import users as user_service

router = APIRouter(tags=["users"])


@router.get("/users", response_model=DataResponse[list[UserOut]])
async def list_users(admin: User = Depends(require_admin), db: AsyncSession = Depends(get_db)):
    return {"data": await user_service.list_users(db)}


@router.post("/users", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
async def register(body: UserCreate, db: AsyncSession = Depends(get_db)):
    user = await user_service.register_user(db, name=body.name, email=body.email, image=body.image)
    return UserCreated(message="User created", user_id=user.id)


@router.get("/users/role/{email}", response_model=RoleOut)
async def get_user_role(email: str, db: AsyncSession = Depends(get_db)):
    return RoleOut(role=await user_service.get_role(db, email))


@router.get("/users/{email}", response_model=DataResponse[UserOut])
async def get_user(
    email: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    ensure_self_or_admin(user, email)
    return {"data": await user_service.get_user(db, email)}


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await user_service.delete_user(db, parse_id(user_id, "User"))
    return MessageResponse(message="User deleted")


@router.get("/members", response_model=DataResponse[list[UserOut]])
async def list_members(
    name: str | None = None,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await user_service.list_members(db, name=name)}
