"""Repositories — SQLAlchemy-backed stores for users, schedules, comments and sessions.

Invariants:
    - Repositories never commit; the calling service owns the transaction
    - Single-entity operations only; cross-entity work (cascade) is requested by services
"""

from scheduler.repositories.user_repository import UserRepository  # noqa: F401
from scheduler.repositories.schedule_repository import ScheduleRepository  # noqa: F401
from scheduler.repositories.comment_repository import CommentRepository  # noqa: F401
from scheduler.repositories.auth_session_repository import AuthSessionRepository  # noqa: F401
