"""lhc assessments (manual)

Revision ID: 000000000001
Revises: 
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "000000000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # one row per finished assessment, never updated
    op.create_table(
        "lhc_assessments",
        sa.Column("id", sa.String(length=32), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=False, server_default="general"),
        sa.Column("company_size", sa.String(), nullable=True),
        sa.Column("company_name", sa.String(), nullable=True),
        sa.Column("answers", sa.JSON(), nullable=True),
        sa.Column("selected_question_ids", sa.JSON(), nullable=True),
        sa.Column("report", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_lhc_assessments_user_id", "lhc_assessments", ["user_id"])
    op.create_index("ix_lhc_assessments_category", "lhc_assessments", ["category"])
    op.create_index("ix_lhc_assessments_created_at", "lhc_assessments", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_lhc_assessments_created_at", table_name="lhc_assessments")
    op.drop_index("ix_lhc_assessments_category", table_name="lhc_assessments")
    op.drop_index("ix_lhc_assessments_user_id", table_name="lhc_assessments")
    op.drop_table("lhc_assessments")
