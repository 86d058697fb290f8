"""User Directory — registration, authentication, and public user lookups.

Invariants:
    - Passwords stored only as hashes produced by AuthService
    - Username uniqueness enforced by the unique index; IntegrityError -> DuplicateUsernameError
    - Unknown username and wrong password produce the same UnauthorizedError
    - Public views never include password_hash

Design Decisions:
    - public_views() is the explicit owner/adopter lookup used at response time,
      one IN query per page instead of per-row relationship loading
    - No application-level "exists?" check before insert: the index is authoritative
"""

import logging
from typing import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dog_adoption.core.domain_types import UserId, UserIdentity
from dog_adoption.core.enforce_input import (
    check_login, check_registration, normalize_text,
)
from dog_adoption.core.errors import DuplicateUsernameError, UnauthorizedError
from dog_adoption.infrastructure.security import AuthService
from dog_adoption.models.user import User
from dog_adoption.schemas.common import UserPublic

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def to_public(user: User) -> UserPublic:
    return UserPublic(id=user.id, username=user.username)


class UserDirectory:
    """Creates and finds user records."""

    def __init__(self, db: AsyncSession, auth: AuthService):
        self.db = db
        self.auth = auth

    async def register(
        self, username: str | None, password: str | None,
    ) -> UserPublic:
        """Create a user. InvalidInputError or DuplicateUsernameError on failure."""
        error = check_registration(username, password)
        if error:
            raise error

        username = normalize_text(username)
        user = User(
            username=username,
            password_hash=self.auth.hash_password(password),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info("Registration rejected, username taken: %s", username)
            raise DuplicateUsernameError()

        logger.info("User registered", extra={"user_id": str(user.id)})
        return to_public(user)

    async def authenticate(
        self, username: str | None, password: str | None,
    ) -> tuple[str, UserPublic]:
        """Verify credentials and issue a bearer token."""
        error = check_login(username, password)
        if error:
            raise error

        user = await self.get_by_username(normalize_text(username))
        if user is None or not self.auth.verify_password(password, user.password_hash):
            raise UnauthorizedError(INVALID_CREDENTIALS)

        token = self.auth.issue(
            UserIdentity(user_id=UserId(user.id), username=user.username),
        )
        logger.info("User logged in", extra={"user_id": str(user.id)})
        return token, to_public(user)

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.username == username),
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: UUID) -> User | None:
        return await self.db.get(User, user_id)

    async def public_views(self, user_ids: Iterable[UUID]) -> dict[UUID, UserPublic]:
        """Resolve ids to public views in one query. Unknown ids are omitted."""
        ids = set(user_ids)
        if not ids:
            return {}
        result = await self.db.execute(select(User).where(User.id.in_(ids)))
        return {user.id: to_public(user) for user in result.scalars().all()}
