"""Schedule Store — Schedule persistence, ordered paging with live comment counts.

Invariants:
    - Paged listing orders by modified_at DESC, ties by id ASC
    - comment_count is computed in the same query (correlated COUNT subquery), never cached
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.core.pagination import PageRequest
from scheduler.models.comment import Comment
from scheduler.models.schedule import Schedule


class ScheduleRepository:
    """Schedule persistence — find, list, page, add, delete."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(
        self, schedule_id: int, *, for_update: bool = False,
    ) -> Schedule | None:
        stmt = select(Schedule).where(Schedule.id == schedule_id)
        if for_update:
            stmt = stmt.with_for_update(of=Schedule)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def exists(self, schedule_id: int) -> bool:
        result = await self.db.execute(
            select(Schedule.id).where(Schedule.id == schedule_id),
        )
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> list[Schedule]:
        result = await self.db.execute(select(Schedule))
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Schedule.id)))
        return result.scalar_one()

    async def page_with_comment_counts(
        self, request: PageRequest,
    ) -> list[tuple[Schedule, int]]:
        """One page of schedules, each paired with its current comment count."""
        comment_count = (
            select(func.count(Comment.id))
            .where(Comment.schedule_id == Schedule.id)
            .correlate(Schedule)
            .scalar_subquery()
            .label("comment_count")
        )
        stmt = (
            select(Schedule, comment_count)
            .order_by(Schedule.modified_at.desc(), Schedule.id.asc())
            .limit(request.size)
            .offset(request.offset)
        )
        result = await self.db.execute(stmt)
        return [(schedule, count) for schedule, count in result.all()]

    async def add(self, schedule: Schedule) -> Schedule:
        self.db.add(schedule)
        await self.db.flush()
        return schedule

    async def delete(self, schedule_id: int) -> None:
        await self.db.execute(delete(Schedule).where(Schedule.id == schedule_id))
