"""Session Gate — rejects unauthenticated calls to /api/* before routing.

Invariants:
    - Only POST /api/users (register) and POST /api/users/login pass without a session
    - Paths outside /api/ (health probes, docs) are never gated
    - A valid session sets request.state.identity; routes read it via get_identity
    - Rejection is a 401 with the same error envelope as every other SchedulerError

Design Decisions:
    - Middleware over per-route dependency: a new route is gated by default
    - Session resolved through the db_manager singleton, not the get_db dependency,
      because middleware runs outside FastAPI's dependency graph
"""

import logging
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from scheduler.config import get_settings
from scheduler.core.errors import SchedulerError, UnauthorizedError
from scheduler.infrastructure import database
from scheduler.services.auth_service import AuthService

logger = logging.getLogger(__name__)

GATED_PREFIX = "/api/"

PUBLIC_ENDPOINTS = frozenset({
    ("POST", "/api/users"),
    ("POST", "/api/users/login"),
})


def is_public(method: str, path: str) -> bool:
    if not path.startswith(GATED_PREFIX):
        return True
    return (method, path.rstrip("/")) in PUBLIC_ENDPOINTS


class SessionGateMiddleware(BaseHTTPMiddleware):
    """Resolve the session cookie to an Identity or answer 401."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS" or is_public(request.method, request.url.path):
            return await call_next(request)

        token = request.cookies.get(get_settings().session_cookie_name)
        try:
            async with database.get_db_manager().session() as db:
                identity = await AuthService(db).resolve(token)
        except SchedulerError as exc:
            return JSONResponse(status_code=exc.http_status, content=exc.to_response())

        if identity is None:
            logger.warning(
                "Rejected request without a valid session",
                extra={"method": request.method, "path": request.url.path},
            )
            exc = UnauthorizedError()
            return JSONResponse(status_code=exc.http_status, content=exc.to_response())

        request.state.identity = identity
        return await call_next(request)
