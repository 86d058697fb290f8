"""User Schemas — credentials in, public views and tokens out."""

from dog_adoption.schemas.common import CamelModel, UserPublic


class UserCredentials(CamelModel):
    """Register/login body. Presence and length checked by enforce_input."""
    username: str | None = None
    password: str | None = None


class RegisterResponse(CamelModel):
    message: str
    user: UserPublic


class LoginResponse(CamelModel):
    message: str
    token: str
    user: UserPublic
