"""Ownership Rules — pure checks shared by the schedule, comment and user services.

Invariants:
    - Ownership is equality of the resolved identity's user_id with the owner FK
    - No roles, no administrative override
    - Pure functions: raise on violation, return None otherwise
"""

from scheduler.core.domain_types import Identity
from scheduler.core.errors import (
    ErrorContext, ForbiddenError, ScheduleMismatchError,
)


def ensure_owner(
    owner_id: int, identity: Identity, action: str, resource_type: str,
    context: ErrorContext | None = None,
) -> None:
    """Raise ForbiddenError unless identity is the owner."""
    if not identity.is_user(owner_id):
        raise ForbiddenError(action, resource_type, context)


def ensure_comment_in_schedule(
    comment_id: int, actual_schedule_id: int, path_schedule_id: int,
) -> None:
    """Raise ScheduleMismatchError when the comment's parent differs from the path."""
    if actual_schedule_id != path_schedule_id:
        raise ScheduleMismatchError(comment_id, path_schedule_id)
