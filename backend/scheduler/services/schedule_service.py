"""Schedule Service — schedule CRUD, owner-only mutation, paged listing with comment counts.

Invariants:
    - The owner is the requesting identity at creation and is never reassigned
    - update/delete: existence check, ownership check and write share one transaction
      (row loaded FOR UPDATE)
    - delete removes every comment of the schedule before the schedule, same transaction
    - Paged summaries carry the comment count as of the query, never a cached value
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.core.domain_types import Identity, ScheduleId
from scheduler.core.errors import ErrorContext, ScheduleNotFoundError, UserNotFoundError
from scheduler.core.ownership import ensure_owner
from scheduler.core.pagination import Page, PageRequest
from scheduler.models.schedule import Schedule
from scheduler.repositories import (
    CommentRepository, ScheduleRepository, UserRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class ScheduleSummary:
    """A schedule paired with its live comment count."""
    schedule: Schedule
    comment_count: int


class ScheduleService:
    """Orchestrates the Schedule and Comment stores for the /api/schedules resource."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)
        self.schedules = ScheduleRepository(db)
        self.comments = CommentRepository(db)

    async def create(self, title: str, content: str, identity: Identity) -> Schedule:
        owner = await self.users.get(identity.user_id)
        if owner is None:
            raise UserNotFoundError(identity.user_id)
        schedule = await self.schedules.add(
            Schedule(title=title, content=content, owner=owner),
        )
        await self.db.commit()
        await self.db.refresh(schedule)
        logger.info(
            "Schedule created",
            extra={"schedule_id": schedule.id, "user_id": owner.id},
        )
        return schedule

    async def get(self, schedule_id: ScheduleId) -> Schedule:
        schedule = await self.schedules.get(schedule_id)
        if schedule is None:
            raise ScheduleNotFoundError(schedule_id)
        return schedule

    async def list_all(self) -> list[Schedule]:
        return await self.schedules.list_all()

    async def list_paged(self, request: PageRequest) -> Page[ScheduleSummary]:
        rows = await self.schedules.page_with_comment_counts(request)
        total = await self.schedules.count()
        return Page(
            items=[ScheduleSummary(schedule, count) for schedule, count in rows],
            page=request.page,
            size=request.size,
            total_items=total,
        )

    async def update(
        self, schedule_id: ScheduleId, title: str, content: str, identity: Identity,
    ) -> Schedule:
        schedule = await self._get_owned(schedule_id, identity, "update")
        schedule.update(title, content)
        await self.db.commit()
        await self.db.refresh(schedule)
        logger.info(
            "Schedule updated",
            extra={"schedule_id": schedule.id, "user_id": identity.user_id},
        )
        return schedule

    async def delete(self, schedule_id: ScheduleId, identity: Identity) -> None:
        schedule = await self._get_owned(schedule_id, identity, "delete")
        removed = await self.comments.delete_by_schedule(schedule.id)
        await self.schedules.delete(schedule.id)
        await self.db.commit()
        logger.info(
            f"Schedule deleted with {removed} comment(s)",
            extra={"schedule_id": schedule_id, "user_id": identity.user_id},
        )

    async def _get_owned(
        self, schedule_id: ScheduleId, identity: Identity, action: str,
    ) -> Schedule:
        schedule = await self.schedules.get(schedule_id, for_update=True)
        if schedule is None:
            raise ScheduleNotFoundError(schedule_id)
        ensure_owner(
            schedule.user_id, identity, action, "Schedule",
            ErrorContext(schedule_id=schedule.id, user_id=identity.user_id),
        )
        return schedule
