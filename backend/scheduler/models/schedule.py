"""Schedule ORM — a calendar/task entry owned by exactly one user.

Invariants:
    - user_id (owner) is set at creation and never reassigned
    - username is derived from the owner at read time, not stored
    - Comments are removed explicitly by ScheduleService.delete in the same transaction;
      the FK also carries ON DELETE CASCADE for stores that support it
"""

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scheduler.db.base import Base, TimestampMixin


class Schedule(Base, TimestampMixin):
    """Schedule entity — owned by a User, parent of Comments."""
    __tablename__ = "schedules"
    __table_args__ = (Index("ix_schedules_modified_at", "modified_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )

    owner: Mapped["User"] = relationship(
        "User", lazy="joined", innerjoin=True,
    )

    @property
    def username(self) -> str:
        return self.owner.username

    def update(self, title: str, content: str) -> None:
        self.title = title
        self.content = content
