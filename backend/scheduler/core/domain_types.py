"""Domain Types — identity and id types shared by services and routes.

Invariants:
    - UserId, ScheduleId, CommentId wrap ints — never use bare int ids in service signatures
    - Identity is immutable once resolved from a session
    - Identity is only constructed by the authentication layer (login / session resolution)

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost, full type-checker support
    - Identity as frozen dataclass, passed explicitly into every service call
"""

from dataclasses import dataclass
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
ScheduleId = NewType("ScheduleId", int)
CommentId = NewType("CommentId", int)
SessionToken = NewType("SessionToken", str)


@dataclass(frozen=True)
class Identity:
    """The resolved (user_id, username) pair established by a valid session."""
    user_id: UserId
    username: str

    def is_user(self, user_id: int) -> bool:
        return self.user_id == user_id
