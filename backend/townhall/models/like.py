"""
ORM model for the `likes` table.

One like per (user, discussion): the unique constraint backs the service's
duplicate check.
"""

from datetime import datetime

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from townhall.database import Base
from townhall.models.types import UTCDateTime, utcnow


class Like(Base):
    __tablename__ = "likes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    discussion_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("discussions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "discussion_id", name="uq_likes_user_discussion"),
    )

    def __repr__(self) -> str:
        return f"<Like(id={self.id}, user_id={self.user_id}, discussion_id={self.discussion_id})>"
