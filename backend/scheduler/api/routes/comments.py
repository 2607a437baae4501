"""Comment Routes — nested under /api/schedules/{schedule_id}/comments.

Invariants:
    - The path schedule_id must match the comment's schedule on update/delete
    - Listing is newest first
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.api.dependencies import CommentIdPath, ScheduleIdPath, get_identity
from scheduler.core.domain_types import CommentId, Identity, ScheduleId
from scheduler.infrastructure.database import get_db
from scheduler.schemas.comment import CommentRequest, CommentResponse
from scheduler.schemas.common import MessageResponse
from scheduler.services.comment_service import CommentService

router = APIRouter(prefix="/api/schedules/{schedule_id}/comments", tags=["comments"])


@router.post(
    "", response_model=CommentResponse, status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    schedule_id: ScheduleIdPath,
    body: CommentRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    return await CommentService(db).create(ScheduleId(schedule_id), body.content, identity)


@router.get("", response_model=list[CommentResponse])
async def list_comments(
    schedule_id: ScheduleIdPath, db: AsyncSession = Depends(get_db),
):
    return await CommentService(db).list_all(ScheduleId(schedule_id))


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    schedule_id: ScheduleIdPath,
    comment_id: CommentIdPath,
    body: CommentRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    return await CommentService(db).update(
        ScheduleId(schedule_id), CommentId(comment_id), body.content, identity,
    )


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    schedule_id: ScheduleIdPath,
    comment_id: CommentIdPath,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    await CommentService(db).delete(ScheduleId(schedule_id), CommentId(comment_id), identity)
    return MessageResponse(message="Comment deleted")
