"""ORM model for the `hashtags` table."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from townhall.database import Base


class Hashtag(Base):
    """
    A normalized tag name (lower case, no leading '#').

    Linked to discussions through the discussion_hashtags join table.
    """

    __tablename__ = "hashtags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        comment="Normalized tag name, unique",
    )

    def __repr__(self) -> str:
        return f"<Hashtag(id={self.id}, name='{self.name}')>"
