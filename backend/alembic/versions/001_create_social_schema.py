"""Create users, discussions, hashtags, comments and likes

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Initial schema. Every foreign key cascades on delete; likes carry a
       unique (user_id, discussion_id) constraint.
Rollback: downgrade() drops every table (destructive).
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
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False, comment="Display name; searched by substring"),
        sa.Column("mobile_no", sa.String(20), nullable=False, comment="Mobile number, unique per user"),
        sa.Column("email", sa.String(255), nullable=False, comment="Email address, unique per user"),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.UniqueConstraint("mobile_no", name="uq_users_mobile_no"),
    )
    op.create_index("ix_users_name", "users", ["name"])

    op.create_table(
        "hashtags",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(50), nullable=False, comment="Normalized tag name, unique"),
        sa.PrimaryKeyConstraint("id", name="pk_hashtags"),
        sa.UniqueConstraint("name", name="uq_hashtags_name"),
    )

    op.create_table(
        "discussions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False, comment="Author"),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("image", sa.String(500), nullable=True, comment="Optional image URL or storage key"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            comment="When this discussion was posted (UTC)",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"],
            name="fk_discussions_user_id_users",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_discussions"),
    )
    op.create_index("ix_discussions_user_id", "discussions", ["user_id"])
    op.create_index("idx_discussions_created_at", "discussions", [sa.text("created_at DESC")])

    op.create_table(
        "discussion_hashtags",
        sa.Column("discussion_id", sa.Integer(), nullable=False),
        sa.Column("hashtag_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["discussion_id"], ["discussions.id"],
            name="fk_discussion_hashtags_discussion_id_discussions",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["hashtag_id"], ["hashtags.id"],
            name="fk_discussion_hashtags_hashtag_id_hashtags",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("discussion_id", "hashtag_id", name="pk_discussion_hashtags"),
    )
    op.create_index("ix_discussion_hashtags_hashtag_id", "discussion_hashtags", ["hashtag_id"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("discussion_id", sa.Integer(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"],
            name="fk_comments_user_id_users",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["discussion_id"], ["discussions.id"],
            name="fk_comments_discussion_id_discussions",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_comments"),
    )
    op.create_index("ix_comments_user_id", "comments", ["user_id"])
    op.create_index("ix_comments_discussion_id", "comments", ["discussion_id"])

    op.create_table(
        "likes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("discussion_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"],
            name="fk_likes_user_id_users",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["discussion_id"], ["discussions.id"],
            name="fk_likes_discussion_id_discussions",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_likes"),
        sa.UniqueConstraint("user_id", "discussion_id", name="uq_likes_user_discussion"),
    )
    op.create_index("ix_likes_discussion_id", "likes", ["discussion_id"])


def downgrade() -> None:
    """Drop every table, children first. All data is lost."""
    op.drop_index("ix_likes_discussion_id", table_name="likes")
    op.drop_table("likes")
    op.drop_index("ix_comments_discussion_id", table_name="comments")
    op.drop_index("ix_comments_user_id", table_name="comments")
    op.drop_table("comments")
    op.drop_index("ix_discussion_hashtags_hashtag_id", table_name="discussion_hashtags")
    op.drop_table("discussion_hashtags")
    op.drop_index("idx_discussions_created_at", table_name="discussions")
    op.drop_index("ix_discussions_user_id", table_name="discussions")
    op.drop_table("discussions")
    op.drop_table("hashtags")
    op.drop_index("ix_users_name", table_name="users")
    op.drop_table("users")
