"""Dog ORM — persists a listing and its adoption record.

Invariants:
    - owner_id set at creation and never updated
    - status transitions: available -> adopted (terminal)
    - status = 'adopted' iff adopter_id and adoption_date are both set (CHECK constraint)
    - adopter_id never equals owner_id (CHECK constraint)
    - name <= 50, description <= 500, adoption_message <= 200 chars

Design Decisions:
    - owner_id/adopter_id are plain FKs without relationship(): user views are
      resolved explicitly by the user directory at response time
    - Composite index (owner_id, status) serves the owner's filtered list;
      adopter_id index serves the adopter's list
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, ForeignKey, CheckConstraint, Index,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from dog_adoption.core.domain_types import (
    DogStatus,
    DOG_NAME_MAX_LENGTH,
    DOG_DESCRIPTION_MAX_LENGTH,
    ADOPTION_MESSAGE_MAX_LENGTH,
)
from dog_adoption.db.base import Base, UTCDateTime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Dog(Base):
    """Dog listing — available until adopted exactly once."""
    __tablename__ = "dogs"
    __table_args__ = (
        CheckConstraint(
            "status IN ('available', 'adopted')", name="ck_dogs_status",
        ),
        CheckConstraint(
            "adopter_id IS NULL OR adopter_id <> owner_id",
            name="ck_dogs_no_self_adoption",
        ),
        CheckConstraint(
            "(status = 'adopted' AND adopter_id IS NOT NULL "
            "AND adoption_date IS NOT NULL) OR "
            "(status = 'available' AND adopter_id IS NULL "
            "AND adoption_date IS NULL)",
            name="ck_dogs_adoption_consistency",
        ),
        Index("ix_dogs_owner_status", "owner_id", "status"),
        Index("ix_dogs_adopter", "adopter_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(DOG_NAME_MAX_LENGTH), nullable=False,
    )
    description: Mapped[str] = mapped_column(
        String(DOG_DESCRIPTION_MAX_LENGTH), nullable=False,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )
    adopter_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=True,
    )
    adoption_message: Mapped[str | None] = mapped_column(
        String(ADOPTION_MESSAGE_MAX_LENGTH), nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DogStatus.AVAILABLE.value,
    )
    adoption_date: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
