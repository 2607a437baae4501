"""Authentication Service — credential check, session issue, session resolution.

Invariants:
    - login is the only path that creates a session record (user_id, username)
    - Every successful login issues a fresh random token; tokens are never reused
    - Unknown email and wrong password fail with the same InvalidCredentialsError
    - resolve() reads the live user row, so a deleted user or expired session yields None
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.config import get_settings
from scheduler.core.domain_types import Identity, SessionToken, UserId
from scheduler.core.errors import InvalidCredentialsError
from scheduler.infrastructure.passwords import verify_password
from scheduler.models.auth_session import AuthSession
from scheduler.repositories import AuthSessionRepository, UserRepository

logger = logging.getLogger(__name__)


def new_session_token() -> SessionToken:
    return SessionToken(secrets.token_urlsafe(32))


class AuthService:
    """Login, logout and session-to-identity resolution."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)
        self.sessions = AuthSessionRepository(db)

    async def login(self, email: str, password: str) -> tuple[SessionToken, Identity]:
        """Verify credentials and open a new session."""
        user = await self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login failed", extra={"error_code": "INVALID_CREDENTIALS"})
            raise InvalidCredentialsError()

        now = datetime.now(timezone.utc)
        token = new_session_token()
        await self.sessions.add(AuthSession(
            token=token,
            user_id=user.id,
            username=user.username,
            created_at=now,
            expires_at=now + timedelta(minutes=get_settings().session_ttl_minutes),
        ))
        await self.db.commit()
        logger.info("User logged in", extra={"user_id": user.id})
        return token, Identity(user_id=UserId(user.id), username=user.username)

    async def logout(self, token: str) -> None:
        await self.sessions.delete(token)
        await self.db.commit()

    async def resolve(self, token: str | None) -> Identity | None:
        """Identity behind a session token, or None if missing/expired/orphaned."""
        if not token:
            return None
        now = datetime.now(timezone.utc)
        user = await self.sessions.get_live_user(token, now)
        if user is None:
            removed = await self.sessions.delete_expired(now)
            if removed:
                await self.db.commit()
            return None
        return Identity(user_id=UserId(user.id), username=user.username)
