"""create chat tables

Revision ID: 3c1f0a9d7b21
Revises:
Create Date: 2026-10-19 09:12:41.331508

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d7b21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create message and block tables."""
    op.create_table(
        "chat_message",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sender_id", sa.String(length=64), nullable=False),
        sa.Column("receiver_id", sa.String(length=64), nullable=False),
        sa.Column("pair_low", sa.String(length=64), nullable=False),
        sa.Column("pair_high", sa.String(length=64), nullable=False),
        sa.Column("book_id", sa.String(length=64), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("hidden_for_sender", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("hidden_for_sender_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("hidden_for_receiver", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("hidden_for_receiver_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("sender_id <> receiver_id", name="ck_chat_message_not_self"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_chat_message_pair_sent",
        "chat_message",
        ["pair_low", "pair_high", "sent_at", "id"],
    )
    op.create_index(
        "ix_chat_message_receiver_unread",
        "chat_message",
        ["receiver_id", "read_at"],
    )

    op.create_table(
        "user_block",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("blocker_id", sa.String(length=64), nullable=False),
        sa.Column("blocked_id", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("reason", sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("blocker_id", "blocked_id", name="uq_user_block_pair"),
    )
    op.create_index("ix_user_block_blocked", "user_block", ["blocked_id"])


def downgrade() -> None:
    """Drop message and block tables."""
    op.drop_index("ix_user_block_blocked", table_name="user_block")
    op.drop_table("user_block")
    op.drop_index("ix_chat_message_receiver_unread", table_name="chat_message")
    op.drop_index("ix_chat_message_pair_sent", table_name="chat_message")
    op.drop_table("chat_message")
