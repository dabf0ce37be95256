"""Initial schema — accounts, lessons, lesson_likes, lesson_favorites, reports.

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
        "accounts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("photo_url", sa.String(2048), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("is_premium", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)

    op.create_table(
        "lessons",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("creator_email", sa.String(320), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("category", sa.String(80), nullable=True),
        sa.Column("emotional_tone", sa.String(80), nullable=True),
        sa.Column("image_url", sa.String(2048), nullable=True),
        sa.Column("access_level", sa.String(20), nullable=False, server_default="public"),
        sa.Column("visibility", sa.String(20), nullable=False, server_default="public"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_lessons_creator_email", "lessons", ["creator_email"])
    op.create_index("ix_lessons_category", "lessons", ["category"])
    op.create_index("ix_lessons_visibility", "lessons", ["visibility"])

    for table in ("lesson_likes", "lesson_favorites"):
        op.create_table(
            table,
            sa.Column(
                "lesson_id", UUID(as_uuid=True),
                sa.ForeignKey("lessons.id", ondelete="CASCADE"),
                primary_key=True,
            ),
            sa.Column("account_email", sa.String(320), primary_key=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        )

    op.create_table(
        "reports",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("lesson_id", sa.String(64), nullable=True),
        sa.Column("reason", sa.Text, nullable=False, server_default=""),
        sa.Column("details", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_reports_email", "reports", ["email"])


def downgrade() -> None:
    op.drop_table("reports")
    op.drop_table("lesson_favorites")
    op.drop_table("lesson_likes")
    op.drop_table("lessons")
    op.drop_table("accounts")
