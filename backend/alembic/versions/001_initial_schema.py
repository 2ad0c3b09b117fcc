"""Initial schema — users, topics, replies.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("username", sa.String(20), primary_key=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
    )

    op.create_table(
        "topics",
        sa.Column("topic_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("subject", sa.Text, nullable=False),
    )

    op.create_table(
        "replies",
        sa.Column("reply_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("topic_id", sa.Integer, sa.ForeignKey("topics.topic_id"), nullable=False),
        sa.Column("time", sa.Integer, nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("author", sa.String(20), nullable=False),
    )
    op.create_index("ix_replies_topic_id", "replies", ["topic_id"])


def downgrade() -> None:
    op.drop_index("ix_replies_topic_id", table_name="replies")
    op.drop_table("replies")
    op.drop_table("topics")
    op.drop_table("users")
