"""Comment Schemas — create/update payload and response."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommentRequest(BaseModel):
    content: str = Field(min_length=1)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("content cannot be empty or whitespace")
        return v


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    schedule_id: int
    content: str
    username: str
    created_at: datetime
    modified_at: datetime
