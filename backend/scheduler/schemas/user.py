"""User Schemas — registration, login and profile update payloads.

Invariants:
    - username: 1-10 chars, stripped, non-blank
    - email: valid address (EmailStr)
    - password: 8-20 chars with at least one letter, one digit and one of @$!%*?&
    - UserUpdate.new_password: None means "keep the current password"; blank input is None
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

PASSWORD_PATTERN = re.compile(
    r"^(?=.*[a-zA-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,20}$",
)


def check_password_strength(password: str) -> str:
    if not PASSWORD_PATTERN.match(password):
        raise ValueError(
            "password must be 8-20 characters and contain a letter, "
            "a digit and one of @$!%*?&",
        )
    return password


def strip_username(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("username cannot be empty or whitespace")
    return v


class UserCreate(BaseModel):
    """Registration payload."""
    username: str = Field(min_length=1, max_length=10)
    email: EmailStr
    password: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return strip_username(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password_strength(v)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=72)


class UserUpdate(BaseModel):
    """Profile update — current password proves ownership, new password optional."""
    username: str = Field(min_length=1, max_length=10)
    email: EmailStr
    current_password: str = Field(min_length=1, max_length=72)
    new_password: str | None = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return strip_username(v)

    @field_validator("new_password", mode="before")
    @classmethod
    def blank_new_password_is_absent(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return check_password_strength(v)


class UserResponse(BaseModel):
    """Public user data — no credential fields."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    created_at: datetime
    modified_at: datetime


class LoginResponse(BaseModel):
    """Identity bound to the session cookie set by the login response."""
    user_id: int
    username: str
