"""AuthSession ORM — server-side session records backing the session cookie.

Invariants:
    - token is an opaque random string, the primary key
    - One row per successful login; rows are never reused across logins
    - Rows die with their user (ON DELETE CASCADE) or on logout/expiry
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from scheduler.db.base import Base, utcnow


class AuthSession(Base):
    """Session record binding token -> (user_id, username)."""
    __tablename__ = "auth_sessions"

    token: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    username: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
