"""
Townhall Backend — User SQLAlchemy Model
==========================================

What:  ORM model for the `users` table.
Who:   Read and written through UserRepository.

Table Design:
    - Integer primary key assigned by the database
    - email and mobile_no are unique; the service checks first so the client
      gets a 409 naming the field, the constraint catches concurrent inserts
    - Discussions, comments and likes point here through user_id columns
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from townhall.database import Base


class User(Base):
    """A registered member who can post, comment and like."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Display name; searched by substring",
    )

    mobile_no: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
        comment="Mobile number, unique per user",
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Email address, unique per user",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name='{self.name}')>"
