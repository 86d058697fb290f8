"""Auth Service — password hashing and bearer credential issuance/verification.

Invariants:
    - Plaintext passwords never leave this module; only hashes are stored
    - verify_password never raises: malformed hashes are a mismatch
    - verify() maps every token failure (signature, expiry, claim shape) to one
      UnauthorizedError("Invalid token") so clients cannot probe the reason
    - Token claims: sub (user id), username, exp

Design Decisions:
    - passlib CryptContext: hash scheme is configuration, old hashes keep verifying
      when the scheme changes (deprecated="auto")
    - python-jose HS256 JWTs: stateless credentials, no token table
"""

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from dog_adoption.config import get_settings
from dog_adoption.core.domain_types import UserId, UserIdentity
from dog_adoption.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)

INVALID_TOKEN = "Invalid token"


class AuthService:
    """Issues and verifies bearer credentials; hashes and checks passwords."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60 * 24,
        hash_scheme: str = "pbkdf2_sha256",
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._pwd_context = CryptContext(schemes=[hash_scheme], deprecated="auto")

    # ─── Passwords ──────────────────────────────────────────────

    def hash_password(self, password: str) -> str:
        return self._pwd_context.hash(password)

    def verify_password(self, password: str, hashed: str) -> bool:
        try:
            return self._pwd_context.verify(password, hashed)
        except (ValueError, TypeError):
            return False

    # ─── Tokens ─────────────────────────────────────────────────

    def issue(
        self, identity: UserIdentity, expires_delta: timedelta | None = None,
    ) -> str:
        """Sign a token for a verified identity."""
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(minutes=self._expire_minutes)
        )
        claims = {
            "sub": str(identity.user_id),
            "username": identity.username,
            "exp": expire,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> UserIdentity:
        """Decode and validate a token. Raises UnauthorizedError on any failure."""
        try:
            claims = jwt.decode(
                token, self._secret_key, algorithms=[self._algorithm],
            )
        except JWTError as e:
            logger.info(f"Token rejected: {e}")
            raise UnauthorizedError(INVALID_TOKEN)

        subject = claims.get("sub")
        username = claims.get("username")
        if not isinstance(subject, str) or not isinstance(username, str):
            raise UnauthorizedError(INVALID_TOKEN)
        try:
            user_id = UserId(UUID(subject))
        except ValueError:
            raise UnauthorizedError(INVALID_TOKEN)
        return UserIdentity(user_id=user_id, username=username)


@lru_cache
def get_auth_service() -> AuthService:
    """FastAPI dependency — one AuthService per process, built from settings."""
    settings = get_settings()
    return AuthService(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
        hash_scheme=settings.password_hash_scheme,
    )
