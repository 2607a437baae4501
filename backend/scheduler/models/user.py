"""User ORM — registered accounts that own schedules and author comments.

Invariants:
    - email and username are unique (DB constraint + service-level check)
    - password_hash holds a bcrypt hash, never the plain password
    - Deleting a user does NOT cascade to schedules or comments
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from scheduler.db.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """Registered user account."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
