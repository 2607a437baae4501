"""Session Store — server-side session records keyed by opaque token."""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.models.auth_session import AuthSession
from scheduler.models.user import User


class AuthSessionRepository:
    """AuthSession persistence — create, resolve, revoke."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, auth_session: AuthSession) -> AuthSession:
        self.db.add(auth_session)
        await self.db.flush()
        return auth_session

    async def get_live_user(self, token: str, now: datetime) -> User | None:
        """User behind an unexpired session, or None."""
        result = await self.db.execute(
            select(User)
            .join(AuthSession, AuthSession.user_id == User.id)
            .where(AuthSession.token == token)
            .where(AuthSession.expires_at > now),
        )
        return result.scalar_one_or_none()

    async def delete(self, token: str) -> None:
        await self.db.execute(delete(AuthSession).where(AuthSession.token == token))

    async def delete_for_user(self, user_id: int) -> None:
        await self.db.execute(
            delete(AuthSession).where(AuthSession.user_id == user_id),
        )

    async def delete_expired(self, now: datetime) -> int:
        result = await self.db.execute(
            delete(AuthSession).where(AuthSession.expires_at <= now),
        )
        return result.rowcount
