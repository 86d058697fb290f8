"""User ORM — persists a registered account.

Invariants:
    - id is UUID primary key (client-side default)
    - username is unique at the storage level (closes the check-then-insert race)
    - password_hash is never exposed outside the user directory
    - Users are never mutated or deleted after registration

Design Decisions:
    - Case-sensitive uniqueness: the index compares raw values
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from dog_adoption.db.base import Base, UTCDateTime


class User(Base):
    """Registered account — owns and adopts dogs by reference."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
