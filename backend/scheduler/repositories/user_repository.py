"""Identity Store — User persistence with unique-field lookups."""

from sqlalchemy import delete, exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.models.comment import Comment
from scheduler.models.schedule import Schedule
from scheduler.models.user import User


class UserRepository:
    """User persistence — find by id/email/username, add, delete."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: int, *, for_update: bool = False) -> User | None:
        stmt = select(User).where(User.id == user_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.username == username),
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def has_content(self, user_id: int) -> bool:
        """True while the user owns any schedule or authored any comment."""
        stmt = select(
            or_(
                exists().where(Schedule.user_id == user_id),
                exists().where(Comment.user_id == user_id),
            ),
        )
        result = await self.db.execute(stmt)
        return bool(result.scalar())

    async def add(self, user: User) -> User:
        self.db.add(user)
        await self.db.flush()
        return user

    async def delete(self, user_id: int) -> None:
        await self.db.execute(delete(User).where(User.id == user_id))
