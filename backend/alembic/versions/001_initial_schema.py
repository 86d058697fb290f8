"""Initial schema — users, dogs.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "dogs",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(500), nullable=False),
        sa.Column("owner_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("adopter_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("adoption_message", sa.String(200), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="available"),
        sa.Column("adoption_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "status IN ('available', 'adopted')", name="ck_dogs_status",
        ),
        sa.CheckConstraint(
            "adopter_id IS NULL OR adopter_id <> owner_id",
            name="ck_dogs_no_self_adoption",
        ),
        sa.CheckConstraint(
            "(status = 'adopted' AND adopter_id IS NOT NULL "
            "AND adoption_date IS NOT NULL) OR "
            "(status = 'available' AND adopter_id IS NULL "
            "AND adoption_date IS NULL)",
            name="ck_dogs_adoption_consistency",
        ),
    )
    op.create_index("ix_dogs_owner_status", "dogs", ["owner_id", "status"])
    op.create_index("ix_dogs_adopter", "dogs", ["adopter_id"])


def downgrade() -> None:
    op.drop_index("ix_dogs_adopter", table_name="dogs")
    op.drop_index("ix_dogs_owner_status", table_name="dogs")
    op.drop_table("dogs")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
