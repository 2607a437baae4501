"""Comment Store — Comment persistence scoped to a schedule."""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.models.comment import Comment


class CommentRepository:
    """Comment persistence — find, list/count by schedule, add, delete."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, comment_id: int, *, for_update: bool = False) -> Comment | None:
        stmt = select(Comment).where(Comment.id == comment_id)
        if for_update:
            stmt = stmt.with_for_update(of=Comment)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_schedule(self, schedule_id: int) -> list[Comment]:
        result = await self.db.execute(
            select(Comment)
            .where(Comment.schedule_id == schedule_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc()),
        )
        return list(result.scalars().all())

    async def count_by_schedule(self, schedule_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Comment.id)).where(Comment.schedule_id == schedule_id),
        )
        return result.scalar_one()

    async def add(self, comment: Comment) -> Comment:
        self.db.add(comment)
        await self.db.flush()
        return comment

    async def delete(self, comment_id: int) -> None:
        await self.db.execute(delete(Comment).where(Comment.id == comment_id))

    async def delete_by_schedule(self, schedule_id: int) -> int:
        """Remove every comment of a schedule. Returns the number removed."""
        result = await self.db.execute(
            delete(Comment).where(Comment.schedule_id == schedule_id),
        )
        return result.rowcount
