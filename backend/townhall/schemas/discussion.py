"""
Townhall Backend — Discussion Schemas
=======================================

What:  Request and response bodies for /api/discussions.

DiscussionResponse carries values that are not columns of the discussions
table: the sorted hashtag names and the comment and like counts. The
service computes them with grouped queries and passes them in explicitly.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from townhall.schemas.common import CamelModel


class DiscussionUpdate(CamelModel):
    """
    Body of PUT /api/discussions/{id}.

    Full overwrite: an omitted image clears it, an omitted hashtag list
    removes every hashtag from the discussion.
    """

    text: str = Field(min_length=1, max_length=10_000, description="Discussion body")
    image: Optional[str] = Field(
        default=None, max_length=500, description="Optional image URL or storage key"
    )
    hashtags: List[str] = Field(
        default_factory=list,
        max_length=20,
        description="Hashtag names; created on first use",
    )


class DiscussionCreate(DiscussionUpdate):
    """Body of POST /api/discussions."""

    user_id: int = Field(ge=1, description="Author's user id")


class DiscussionResponse(CamelModel):
    id: int
    user_id: int
    text: str
    image: Optional[str] = None
    created_at: datetime
    hashtags: List[str] = Field(default_factory=list)
    comment_count: int = 0
    like_count: int = 0
