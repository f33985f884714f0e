"""FastAPI dependencies for injection into route handlers."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from courthub.core.auth import email_from_token
from courthub.core.database import get_db
from courthub.core.errors import AuthError, ForbiddenError
from courthub.models.member import User
from courthub.services.users import get_user_by_email, normalize_email

bearer_scheme = HTTPBearer(auto_error=False)


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the registered user named by the bearer token."""
    if credentials is None:
        raise AuthError("Not authenticated")

    try:
        email = email_from_token(credentials.credentials)
    except JWTError:
        raise AuthError("Invalid or expired token") from None

    user = await get_user_by_email(db, email)
    if user is None:
        raise AuthError("User not found")

    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Require the current user to hold the admin role."""
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user


def ensure_self_or_admin(user: User, email: str) -> None:
    """Non-admins may only read records filed under their own email."""
    if not user.is_admin and user.email != normalize_email(email):
        raise ForbiddenError("You can only access your own records")
