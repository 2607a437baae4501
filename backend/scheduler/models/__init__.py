"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Ownership is by FK reference (user_id), never a copied username

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from scheduler.models.user import User  # noqa: F401
from scheduler.models.schedule import Schedule  # noqa: F401
from scheduler.models.comment import Comment  # noqa: F401
from scheduler.models.auth_session import AuthSession  # noqa: F401
