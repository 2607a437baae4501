"""Comment ORM — a remark by one user on exactly one schedule.

Invariants:
    - user_id (author) and schedule_id (parent) are immutable after creation
    - username is derived from the author at read time
"""

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scheduler.db.base import Base, TimestampMixin


class Comment(Base, TimestampMixin):
    """Comment entity — authored by a User, scoped to a Schedule."""
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    schedule_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("schedules.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )

    author: Mapped["User"] = relationship(
        "User", lazy="joined", innerjoin=True,
    )

    @property
    def username(self) -> str:
        return self.author.username

    def update(self, content: str) -> None:
        self.content = content
