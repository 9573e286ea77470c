"""Create remainders table.

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

OCCASIONS = ("birthday", "anniversary", "meeting", "appointment", "other")
RELATIONSHIPS = (
    "father",
    "mother",
    "brother",
    "sister",
    "friend",
    "colleague",
    "spouse",
    "child",
    "other",
)


def upgrade() -> None:
    """Create remainders table with its lookup indexes."""
    op.create_table(
        "remainders",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column(
            "occasion",
            sa.Enum(
                *OCCASIONS,
                name="remainder_occasion",
                native_enum=False,
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(length=5), nullable=False),
        sa.Column(
            "relationship",
            sa.Enum(
                *RELATIONSHIPS,
                name="remainder_relationship",
                native_enum=False,
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_remainders_email_date", "remainders", ["email", "date"], unique=False
    )
    op.create_index(op.f("ix_remainders_phone"), "remainders", ["phone"], unique=False)


def downgrade() -> None:
    """Drop remainders table."""
    op.drop_index(op.f("ix_remainders_phone"), table_name="remainders")
    op.drop_index("ix_remainders_email_date", table_name="remainders")
    op.drop_table("remainders")
