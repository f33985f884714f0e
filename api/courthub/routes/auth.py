"""Credential routes: issue and clear the signed access token."""

from fastapi import APIRouter, Response

from courthub.core.auth import create_access_token
from courthub.core.config import settings
from courthub.schemas import MessageResponse, TokenRequest, TokenResponse

router = APIRouter(tags=["auth"])


@router.post("/jwt", response_model=TokenResponse)
async def issue_token(body: TokenRequest, response: Response):
    """Sign a 7-day credential for the caller's email.

    The identity provider in front of this API has already verified the
    email. The token goes back in the body for ``Authorization: Bearer`` use
    and as an HTTP-only cookie for browser clients.
    """
    token = create_access_token(body.email)
    response.set_cookie(
        settings.token_cookie_name,
        token,
        max_age=settings.token_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )
    return TokenResponse(token=token)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    response.delete_cookie(settings.token_cookie_name, httponly=True, secure=settings.cookie_secure, samesite="strict")
    return MessageResponse(message="Logged out")
