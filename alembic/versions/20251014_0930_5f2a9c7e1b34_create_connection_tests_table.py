"""create connection_tests table

The only schema the harness pushes: one small table, created idempotently
so that repeated runs against the same container succeed.

Revision ID: 5f2a9c7e1b34
Revises:
Create Date: 2025-10-14 09:30:12.481907

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy import inspect

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5f2a9c7e1b34"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - create connection_tests if it doesn't exist."""
    connection = op.get_bind()
    inspector = inspect(connection)
    if "connection_tests" in inspector.get_table_names():
        return

    op.create_table(
        "connection_tests",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("scenario", sa.String(length=100), nullable=False),
        sa.Column("style", sa.String(length=50), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_connection_tests_scenario", "connection_tests", ["scenario"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_connection_tests_scenario", table_name="connection_tests")
    op.drop_table("connection_tests")
