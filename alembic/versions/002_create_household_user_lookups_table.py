"""create household_user_lookups table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 10:30:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # The unique constraint on user_id is what keeps a user in one household
    # at a time, including under concurrent inserts.
    op.create_table(
        "household_user_lookups",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("household_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["household_id"], ["households.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", name="uq_household_user_lookups_user_id"),
    )
    op.create_index(
        "ix_household_user_lookups_id", "household_user_lookups", ["id"], unique=False
    )
    op.create_index(
        "ix_household_user_lookups_household_id",
        "household_user_lookups",
        ["household_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(
        "ix_household_user_lookups_household_id", table_name="household_user_lookups"
    )
    op.drop_index("ix_household_user_lookups_id", table_name="household_user_lookups")
    op.drop_table("household_user_lookups")
