"""Request Dependencies — per-request services and the bearer-auth gate.

Invariants:
    - All services in one request share the same AsyncSession (FastAPI caches get_db)
    - get_current_user runs before the route body: unauthenticated requests never
      reach a handler
    - Missing credential -> "Access token required"; any bad credential -> "Invalid token"

Design Decisions:
    - HTTPBearer(auto_error=False): the domain error carries the message, not FastAPI's 403
    - A valid token for a user that no longer exists is treated as invalid
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from dog_adoption.core.domain_types import UserIdentity
from dog_adoption.core.errors import ErrorContext, UnauthorizedError
from dog_adoption.infrastructure.database import get_db
from dog_adoption.infrastructure.security import (
    AuthService, INVALID_TOKEN, get_auth_service,
)
from dog_adoption.services.dog_registry import DogRegistry
from dog_adoption.services.user_directory import UserDirectory

TOKEN_REQUIRED = "Access token required"

bearer_scheme = HTTPBearer(auto_error=False)


def get_user_directory(
    db: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
) -> UserDirectory:
    return UserDirectory(db, auth)


def get_dog_registry(
    db: AsyncSession = Depends(get_db),
    users: UserDirectory = Depends(get_user_directory),
) -> DogRegistry:
    return DogRegistry(db, users)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
    users: UserDirectory = Depends(get_user_directory),
) -> UserIdentity:
    """Resolve the bearer token to a live user identity."""
    if credentials is None:
        raise UnauthorizedError(TOKEN_REQUIRED)

    identity = auth.verify(credentials.credentials)
    if await users.get_by_id(identity.user_id) is None:
        raise UnauthorizedError(
            INVALID_TOKEN, ErrorContext(user_id=str(identity.user_id)),
        )
    return identity
