"""Schedule Schemas — create/update payload, single and paged responses.

Invariants:
    - title: 1-100 chars, stripped, non-blank
    - content: stripped, non-blank
    - username in responses is the owner's current username
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScheduleRequest(BaseModel):
    """Create and update share one payload: title and content only."""
    title: str = Field(min_length=1, max_length=100)
    content: str = Field(min_length=1)

    @field_validator("title", "content")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty or whitespace")
        return v


class ScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    username: str
    created_at: datetime
    modified_at: datetime


class ScheduleSummaryResponse(ScheduleResponse):
    """Paged listing entry with the live comment count."""
    comment_count: int


class SchedulePageResponse(BaseModel):
    items: list[ScheduleSummaryResponse]
    page: int
    size: int
    total_items: int
    total_pages: int
    has_next: bool
