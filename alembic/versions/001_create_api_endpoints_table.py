"""Create api_endpoints table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `api_endpoints` table: UUID key, unique name, path,
       method, optional description, created/updated timestamps (UTC).

Rollback: downgrade() drops the table entirely (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the api_endpoints table with its constraints and indexes."""
    op.create_table(
        "api_endpoints",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("path", sa.Text(), nullable=False),
        sa.Column("method", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        # Conflict detection relies on this constraint, not on a pre-check
        sa.UniqueConstraint("name", name="uq_api_endpoints_name"),
    )

    op.create_index(
        "idx_api_endpoints_created_at",
        "api_endpoints",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_api_endpoints_created_at", table_name="api_endpoints")
    op.drop_table("api_endpoints")
