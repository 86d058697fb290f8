"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId and DogId wrap UUIDs — never use bare UUID in domain logic
    - DogStatus encodes the only two lifecycle states; no raw string matching
    - Field limits live here as the single source of truth

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
DogId = NewType("DogId", UUID)


# ─── Field Limits ────────────────────────────────────────────────

USERNAME_MIN_LENGTH: int = 3
PASSWORD_MIN_LENGTH: int = 6
DOG_NAME_MAX_LENGTH: int = 50
DOG_DESCRIPTION_MAX_LENGTH: int = 500
ADOPTION_MESSAGE_MAX_LENGTH: int = 200


# ─── Enums ───────────────────────────────────────────────────────

class DogStatus(str, Enum):
    """Dog lifecycle states — maps to DB `status` column."""
    AVAILABLE = "available"
    ADOPTED = "adopted"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class UserIdentity:
    """Verified identity carried by a bearer credential."""
    user_id: UserId
    username: str


@dataclass(frozen=True)
class DogSnapshot:
    """The fields lifecycle rules need, detached from the ORM row."""
    id: DogId
    owner_id: UserId
    adopter_id: UserId | None
    status: DogStatus
