"""create approved timetables

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None

approval_status = sa.Enum("approved", name="approval_status")


def upgrade() -> None:
    op.create_table(
        "approved_timetables",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("department", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("semester", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("candidate_name", sa.String(length=100), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("status", approval_status, nullable=False),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_approved_timetables_approved_at", "approved_timetables", ["approved_at"])


def downgrade() -> None:
    op.drop_index("ix_approved_timetables_approved_at", table_name="approved_timetables")
    op.drop_table("approved_timetables")
    approval_status.drop(op.get_bind(), checkfirst=True)
