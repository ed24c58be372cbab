"""create donors, hospitals and users tables

Revision ID: 0001_create_registry_tables
Revises:
Create Date: 2026-10-19 09:00:00
"""

import sqlalchemy as sa
from alembic import op

from app.db.base import GUID

revision = "0001_create_registry_tables"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "donors",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("gender", sa.String(length=10), nullable=False),
        sa.Column("blood_group", sa.String(length=3), nullable=False),
        sa.Column("phone", sa.String(length=15), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=255), nullable=False),
        sa.Column("city", sa.String(length=100), nullable=False),
        sa.Column("state", sa.String(length=100), nullable=False),
        sa.Column("age_confirmation", sa.Boolean(), nullable=False),
        sa.Column("medical_questions", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_donors_id", "donors", ["id"])
    op.create_index("ix_donors_blood_group", "donors", ["blood_group"])
    op.create_index("ix_donors_created_at", "donors", ["created_at"])

    op.create_table(
        "hospitals",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("address", sa.String(length=255), nullable=False),
        sa.Column("city", sa.String(length=100), nullable=False),
        sa.Column("state", sa.String(length=100), nullable=False),
        sa.Column("contact_person", sa.String(length=100), nullable=False),
        sa.Column("blood_group", sa.String(length=50), nullable=True),
        sa.Column("unit", sa.String(length=50), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_hospitals_id", "hospitals", ["id"])
    op.create_index("ix_hospitals_created_at", "hospitals", ["created_at"])

    op.create_table(
        "users",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)


def downgrade() -> None:
    op.drop_table("users")
    op.drop_table("hospitals")
    op.drop_table("donors")
