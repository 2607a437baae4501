"""Comment Service — comment CRUD with schedule-membership and author checks.

Invariants:
    - Any authenticated identity may comment on any existing schedule
    - update/delete check, in order: comment exists, comment belongs to the path's
      schedule, identity is the author
    - Checks and write share one transaction (row loaded FOR UPDATE)
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.core.domain_types import CommentId, Identity, ScheduleId
from scheduler.core.errors import (
    CommentNotFoundError, ErrorContext, ScheduleNotFoundError, UserNotFoundError,
)
from scheduler.core.ownership import ensure_comment_in_schedule, ensure_owner
from scheduler.models.comment import Comment
from scheduler.repositories import (
    CommentRepository, ScheduleRepository, UserRepository,
)

logger = logging.getLogger(__name__)


class CommentService:
    """Orchestrates the Comment store for /api/schedules/{id}/comments."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)
        self.schedules = ScheduleRepository(db)
        self.comments = CommentRepository(db)

    async def create(
        self, schedule_id: ScheduleId, content: str, identity: Identity,
    ) -> Comment:
        author = await self.users.get(identity.user_id)
        if author is None:
            raise UserNotFoundError(identity.user_id)
        if not await self.schedules.exists(schedule_id):
            raise ScheduleNotFoundError(schedule_id)

        comment = await self.comments.add(Comment(
            content=content, author=author, schedule_id=schedule_id,
        ))
        await self.db.commit()
        await self.db.refresh(comment)
        logger.info(
            "Comment created",
            extra={
                "comment_id": comment.id,
                "schedule_id": schedule_id,
                "user_id": author.id,
            },
        )
        return comment

    async def list_all(self, schedule_id: ScheduleId) -> list[Comment]:
        if not await self.schedules.exists(schedule_id):
            raise ScheduleNotFoundError(schedule_id)
        return await self.comments.list_by_schedule(schedule_id)

    async def update(
        self,
        schedule_id: ScheduleId,
        comment_id: CommentId,
        content: str,
        identity: Identity,
    ) -> Comment:
        comment = await self._get_authored(schedule_id, comment_id, identity, "update")
        comment.update(content)
        await self.db.commit()
        await self.db.refresh(comment)
        logger.info(
            "Comment updated",
            extra={"comment_id": comment.id, "user_id": identity.user_id},
        )
        return comment

    async def delete(
        self, schedule_id: ScheduleId, comment_id: CommentId, identity: Identity,
    ) -> None:
        comment = await self._get_authored(schedule_id, comment_id, identity, "delete")
        await self.comments.delete(comment.id)
        await self.db.commit()
        logger.info(
            "Comment deleted",
            extra={"comment_id": comment_id, "user_id": identity.user_id},
        )

    async def _get_authored(
        self,
        schedule_id: ScheduleId,
        comment_id: CommentId,
        identity: Identity,
        action: str,
    ) -> Comment:
        comment = await self.comments.get(comment_id, for_update=True)
        if comment is None:
            raise CommentNotFoundError(comment_id)
        ensure_comment_in_schedule(comment.id, comment.schedule_id, schedule_id)
        ensure_owner(
            comment.user_id, identity, action, "Comment",
            ErrorContext(comment_id=comment.id, user_id=identity.user_id),
        )
        return comment
