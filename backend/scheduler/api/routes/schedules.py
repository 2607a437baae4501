"""Schedule Routes — CRUD plus the paged summary listing.

Invariants:
    - /paged is declared before /{schedule_id} so it is never parsed as an id
    - page is 1-based; size is 1..100
    - Deleting a schedule deletes its comments in the same transaction
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.api.dependencies import (
    PageQuery, PageSizeQuery, ScheduleIdPath, get_identity,
)
from scheduler.core.domain_types import Identity, ScheduleId
from scheduler.core.pagination import PageRequest
from scheduler.infrastructure.database import get_db
from scheduler.schemas.common import MessageResponse
from scheduler.schemas.schedule import (
    SchedulePageResponse, ScheduleRequest, ScheduleResponse,
    ScheduleSummaryResponse,
)
from scheduler.services.schedule_service import ScheduleService

router = APIRouter(prefix="/api/schedules", tags=["schedules"])


@router.post(
    "", response_model=ScheduleResponse, status_code=status.HTTP_201_CREATED,
)
async def create_schedule(
    body: ScheduleRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    return await ScheduleService(db).create(body.title, body.content, identity)


@router.get("", response_model=list[ScheduleResponse])
async def list_schedules(db: AsyncSession = Depends(get_db)):
    return await ScheduleService(db).list_all()


@router.get("/paged", response_model=SchedulePageResponse)
async def list_schedules_paged(
    page: PageQuery = 1,
    size: PageSizeQuery = 10,
    db: AsyncSession = Depends(get_db),
):
    """Newest-modified first, each entry with its current comment count."""
    result = await ScheduleService(db).list_paged(PageRequest(page=page, size=size))
    return SchedulePageResponse(
        items=[
            ScheduleSummaryResponse(
                id=s.schedule.id,
                title=s.schedule.title,
                content=s.schedule.content,
                username=s.schedule.username,
                created_at=s.schedule.created_at,
                modified_at=s.schedule.modified_at,
                comment_count=s.comment_count,
            )
            for s in result.items
        ],
        page=result.page,
        size=result.size,
        total_items=result.total_items,
        total_pages=result.total_pages,
        has_next=result.has_next,
    )


@router.get("/{schedule_id}", response_model=ScheduleResponse)
async def get_schedule(
    schedule_id: ScheduleIdPath, db: AsyncSession = Depends(get_db),
):
    return await ScheduleService(db).get(ScheduleId(schedule_id))


@router.put("/{schedule_id}", response_model=ScheduleResponse)
async def update_schedule(
    schedule_id: ScheduleIdPath,
    body: ScheduleRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    return await ScheduleService(db).update(
        ScheduleId(schedule_id), body.title, body.content, identity,
    )


@router.delete("/{schedule_id}", response_model=MessageResponse)
async def delete_schedule(
    schedule_id: ScheduleIdPath,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    await ScheduleService(db).delete(ScheduleId(schedule_id), identity)
    return MessageResponse(message="Schedule deleted")
