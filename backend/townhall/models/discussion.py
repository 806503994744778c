"""
Townhall Backend — Discussion SQLAlchemy Model
================================================

What:  ORM model for the `discussions` table and the `discussion_hashtags`
       join table.
Who:   Used by DiscussionRepository; the join table is also touched by
       HashtagRepository when a hashtag is deleted.

Table Design:
    - user_id references users.id (ON DELETE CASCADE)
    - image is an optional URL or storage key, never the image bytes
    - created_at is UTC; the list endpoint orders by it, newest first
    - discussion_hashtags has a composite primary key, so a discussion can
      carry a given hashtag at most once
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from townhall.database import Base
from townhall.models.types import UTCDateTime, utcnow


discussion_hashtags = Table(
    "discussion_hashtags",
    Base.metadata,
    Column(
        "discussion_id",
        Integer,
        ForeignKey("discussions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "hashtag_id",
        Integer,
        ForeignKey("hashtags.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Discussion(Base):
    """A post by one user; commented on and liked by others."""

    __tablename__ = "discussions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Author",
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)

    image: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        default=None,
        comment="Optional image URL or storage key",
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        comment="When this discussion was posted (UTC)",
    )

    __table_args__ = (
        Index("idx_discussions_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Discussion(id={self.id}, user_id={self.user_id})>"
