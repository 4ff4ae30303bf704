"""Initial schema: reports and buildings.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from progress_tracker.core.domain_types import PHASE_FIELDS

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "reports",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("project_name", sa.Text, nullable=False),
        sa.Column("report_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sqlite_autoincrement=True,
    )

    phase_columns = [
        sa.Column(name, sa.Text, nullable=True) for name in PHASE_FIELDS
    ]
    op.create_table(
        "buildings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "report_id", sa.Integer,
            sa.ForeignKey("reports.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("name", sa.Text, nullable=False),
        *phase_columns,
        sqlite_autoincrement=True,
    )
    op.create_index("ix_buildings_report_id", "buildings", ["report_id"])


def downgrade() -> None:
    op.drop_index("ix_buildings_report_id", table_name="buildings")
    op.drop_table("buildings")
    op.drop_table("reports")
