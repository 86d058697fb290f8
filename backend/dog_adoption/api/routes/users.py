"""User Routes — registration and login.

Invariants:
    - No authentication required on either endpoint
    - Responses carry the public user view only (id, username)

Design Decisions:
    - Body optional: an empty request gets the domain "required" message, not a schema error
"""

import logging

from fastapi import APIRouter, Depends, status

from dog_adoption.api.dependencies import get_user_directory
from dog_adoption.schemas.user import LoginResponse, RegisterResponse, UserCredentials
from dog_adoption.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "/register", response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_user(
    body: UserCredentials | None = None,
    users: UserDirectory = Depends(get_user_directory),
):
    """Create an account."""
    body = body or UserCredentials()
    user = await users.register(body.username, body.password)
    return RegisterResponse(message="User registered successfully", user=user)


@router.post("/login", response_model=LoginResponse)
async def login_user(
    body: UserCredentials | None = None,
    users: UserDirectory = Depends(get_user_directory),
):
    """Exchange credentials for a bearer token."""
    body = body or UserCredentials()
    token, user = await users.authenticate(body.username, body.password)
    return LoginResponse(message="Login successful", token=token, user=user)
