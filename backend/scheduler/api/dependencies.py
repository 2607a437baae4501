"""Route dependencies and parameter bounds shared across resources.

Invariants:
    - Path ids and page offsets fit a signed 32-bit INTEGER column; larger
      values are rejected as VALIDATION_ERROR before any query runs
"""

from typing import Annotated

from fastapi import Path, Query, Request

from scheduler.core.domain_types import Identity
from scheduler.core.errors import UnauthorizedError

MAX_ID = 2**31 - 1
MAX_PAGE_SIZE = 100
MAX_PAGE = MAX_ID // MAX_PAGE_SIZE

UserIdPath = Annotated[int, Path(ge=1, le=MAX_ID)]
ScheduleIdPath = Annotated[int, Path(ge=1, le=MAX_ID)]
CommentIdPath = Annotated[int, Path(ge=1, le=MAX_ID)]
PageQuery = Annotated[int, Query(ge=1, le=MAX_PAGE)]
PageSizeQuery = Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)]


def get_identity(request: Request) -> Identity:
    """Identity attached by SessionGateMiddleware."""
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise UnauthorizedError()
    return identity
