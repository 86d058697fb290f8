"""Input Enforcement — boundary validation for user and dog payloads.

Invariants:
    - Every check is PURE: returns InvalidInputError or None, never raises
    - Checks run before any persistence call
    - Length limits are reported together, joined by ", ", in field order
    - Normalizers strip surrounding whitespace; stored text is always trimmed

Design Decisions:
    - Missing and empty-string fields are the same case ("required")
    - Length limits checked on the trimmed value: whitespace padding never counts
    - Shell raises the returned error, core only decides
"""

from dog_adoption.core.domain_types import (
    USERNAME_MIN_LENGTH,
    PASSWORD_MIN_LENGTH,
    DOG_NAME_MAX_LENGTH,
    DOG_DESCRIPTION_MAX_LENGTH,
    ADOPTION_MESSAGE_MAX_LENGTH,
)
from dog_adoption.core.errors import InvalidInputError


CREDENTIALS_REQUIRED = "Username and password are required"
USERNAME_TOO_SHORT = (
    f"Username must be at least {USERNAME_MIN_LENGTH} characters long"
)
PASSWORD_TOO_SHORT = (
    f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
)
DOG_FIELDS_REQUIRED = "Name and description are required"
DOG_NAME_EMPTY = "Dog name cannot be empty"
DOG_DESCRIPTION_EMPTY = "Dog description cannot be empty"
DOG_NAME_TOO_LONG = (
    f"Dog name cannot exceed {DOG_NAME_MAX_LENGTH} characters"
)
DOG_DESCRIPTION_TOO_LONG = (
    f"Description cannot exceed {DOG_DESCRIPTION_MAX_LENGTH} characters"
)
ADOPTION_MESSAGE_TOO_LONG = (
    f"Adoption message cannot exceed {ADOPTION_MESSAGE_MAX_LENGTH} characters"
)


def normalize_text(value: str | None) -> str | None:
    """Strip surrounding whitespace; empty result becomes None."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


# ─── Users ───────────────────────────────────────────────────────

def check_registration(
    username: str | None, password: str | None,
) -> InvalidInputError | None:
    """Registration requires both fields and minimum lengths."""
    username = normalize_text(username)
    if not username or not password:
        return InvalidInputError(CREDENTIALS_REQUIRED)
    if len(username) < USERNAME_MIN_LENGTH:
        return InvalidInputError(USERNAME_TOO_SHORT)
    if len(password) < PASSWORD_MIN_LENGTH:
        return InvalidInputError(PASSWORD_TOO_SHORT)
    return None


def check_login(
    username: str | None, password: str | None,
) -> InvalidInputError | None:
    """Login only requires presence; wrong values are an auth failure."""
    if not normalize_text(username) or not password:
        return InvalidInputError(CREDENTIALS_REQUIRED)
    return None


# ─── Dogs ────────────────────────────────────────────────────────

def check_dog_fields(
    name: str | None, description: str | None,
) -> InvalidInputError | None:
    """Required, non-blank, and within length limits (aggregated)."""
    if not name or not description:
        return InvalidInputError(DOG_FIELDS_REQUIRED)

    name = name.strip()
    description = description.strip()
    if not name:
        return InvalidInputError(DOG_NAME_EMPTY)
    if not description:
        return InvalidInputError(DOG_DESCRIPTION_EMPTY)

    violations = []
    if len(name) > DOG_NAME_MAX_LENGTH:
        violations.append(DOG_NAME_TOO_LONG)
    if len(description) > DOG_DESCRIPTION_MAX_LENGTH:
        violations.append(DOG_DESCRIPTION_TOO_LONG)
    if violations:
        return InvalidInputError(", ".join(violations))
    return None


def check_adoption_message(message: str | None) -> InvalidInputError | None:
    """Optional thank-you note, bounded after trimming."""
    message = normalize_text(message)
    if message and len(message) > ADOPTION_MESSAGE_MAX_LENGTH:
        return InvalidInputError(ADOPTION_MESSAGE_TOO_LONG)
    return None
