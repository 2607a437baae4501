"""User Service — registration, profile/password update, account removal.

Invariants:
    - Email uniqueness is checked before username uniqueness (register and update)
    - Only the user themself may update or delete their account
    - Profile update requires proof of the current password
    - new_password is applied only when present (None means "unchanged")
    - Account removal does not cascade: refused while the user owns schedules or comments
    - A unique-constraint race at commit is reported as DuplicateEmail/DuplicateUsername
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.core.domain_types import Identity, UserId
from scheduler.core.errors import (
    DuplicateEmailError, DuplicateUsernameError, ErrorContext,
    InvalidCredentialsError, UserHasContentError, UserNotFoundError,
)
from scheduler.core.ownership import ensure_owner
from scheduler.infrastructure.passwords import hash_password, verify_password
from scheduler.models.user import User
from scheduler.repositories import AuthSessionRepository, UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Identity Store orchestration for the /api/users resource."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)
        self.sessions = AuthSessionRepository(db)

    async def register(self, username: str, email: str, password: str) -> User:
        await self._ensure_unique(email, username)
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
        )
        try:
            await self.users.add(user)
            await self.db.commit()
        except IntegrityError:
            await self._explain_conflict(email, username)
            raise
        await self.db.refresh(user)
        logger.info("User registered", extra={"user_id": user.id})
        return user

    async def list_all(self) -> list[User]:
        return await self.users.list_all()

    async def get(self, user_id: UserId) -> User:
        user = await self.users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def update(
        self,
        user_id: UserId,
        username: str,
        email: str,
        current_password: str,
        new_password: str | None,
        identity: Identity,
    ) -> User:
        user = await self.users.get(user_id, for_update=True)
        if user is None:
            raise UserNotFoundError(user_id)
        ensure_owner(user.id, identity, "update", "User", ErrorContext(user_id=user.id))
        if not verify_password(current_password, user.password_hash):
            raise InvalidCredentialsError("Current password does not match")

        await self._ensure_unique(email, username, exclude_user_id=user.id)
        user.username = username
        user.email = email
        if new_password is not None:
            user.password_hash = hash_password(new_password)

        try:
            await self.db.commit()
        except IntegrityError:
            await self._explain_conflict(email, username, exclude_user_id=user_id)
            raise
        await self.db.refresh(user)
        logger.info("User updated", extra={"user_id": user.id})
        return user

    async def delete(self, user_id: UserId, identity: Identity) -> None:
        user = await self.users.get(user_id, for_update=True)
        if user is None:
            raise UserNotFoundError(user_id)
        ensure_owner(user.id, identity, "delete", "User", ErrorContext(user_id=user.id))
        if await self.users.has_content(user.id):
            raise UserHasContentError(user.id)

        await self.sessions.delete_for_user(user.id)
        await self.users.delete(user.id)
        await self.db.commit()
        logger.info("User deleted", extra={"user_id": user_id})

    async def _explain_conflict(
        self, email: str, username: str, exclude_user_id: int | None = None,
    ) -> None:
        """A concurrent writer took the email or username between check and commit."""
        await self.db.rollback()
        await self._ensure_unique(email, username, exclude_user_id)

    async def _ensure_unique(
        self, email: str, username: str, exclude_user_id: int | None = None,
    ) -> None:
        by_email = await self.users.get_by_email(email)
        if by_email is not None and by_email.id != exclude_user_id:
            raise DuplicateEmailError()
        by_username = await self.users.get_by_username(username)
        if by_username is not None and by_username.id != exclude_user_id:
            raise DuplicateUsernameError()
