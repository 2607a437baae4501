"""User Routes — registration, session login/logout, profile management.

Invariants:
    - register and login are the only public /api endpoints
    - login sets the session token as an HttpOnly cookie; logout deletes it
    - update/delete act only on the caller's own account (enforced in UserService)
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.api.dependencies import UserIdPath, get_identity
from scheduler.config import get_settings
from scheduler.core.domain_types import Identity, UserId
from scheduler.infrastructure.database import get_db
from scheduler.schemas.common import MessageResponse
from scheduler.schemas.user import (
    LoginRequest, LoginResponse, UserCreate, UserResponse, UserUpdate,
)
from scheduler.services.auth_service import AuthService
from scheduler.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def register(body: UserCreate, db: AsyncSession = Depends(get_db)):
    return await UserService(db).register(body.username, body.email, body.password)


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest, response: Response, db: AsyncSession = Depends(get_db),
):
    """Check credentials and bind a fresh session to the response cookie."""
    token, identity = await AuthService(db).login(body.email, body.password)
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        max_age=settings.session_ttl_minutes * 60,
        path="/",
    )
    return LoginResponse(user_id=identity.user_id, username=identity.username)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    settings = get_settings()
    await AuthService(db).logout(request.cookies.get(settings.session_cookie_name, ""))
    response.delete_cookie(settings.session_cookie_name, path="/")
    logger.info("User logged out", extra={"user_id": identity.user_id})
    return MessageResponse(message="Logged out")


@router.get("", response_model=list[UserResponse])
async def list_users(db: AsyncSession = Depends(get_db)):
    return await UserService(db).list_all()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: UserIdPath, db: AsyncSession = Depends(get_db)):
    return await UserService(db).get(UserId(user_id))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UserIdPath,
    body: UserUpdate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    """Update own username/email; password changes only when new_password is given."""
    return await UserService(db).update(
        UserId(user_id),
        username=body.username,
        email=body.email,
        current_password=body.current_password,
        new_password=body.new_password,
        identity=identity,
    )


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: UserIdPath,
    response: Response,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    """Delete own account and its sessions.

    Refused with 400 USER_HAS_CONTENT while the user still owns schedules or
    comments; those are never removed along with the account.
    """
    await UserService(db).delete(UserId(user_id), identity)
    response.delete_cookie(get_settings().session_cookie_name, path="/")
    return MessageResponse(message="User deleted")
