"""Request and response bodies for /api/comments."""

from datetime import datetime

from pydantic import Field

from townhall.schemas.common import CamelModel


class CommentUpdate(CamelModel):
    """Body of PUT /api/comments/{id}; only the text is mutable."""

    text: str = Field(min_length=1, max_length=5_000)


class CommentCreate(CommentUpdate):
    user_id: int = Field(ge=1)
    discussion_id: int = Field(ge=1)


class CommentResponse(CamelModel):
    id: int
    user_id: int
    discussion_id: int
    text: str
    created_at: datetime
