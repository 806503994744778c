"""Request and response bodies for /api/likes."""

from datetime import datetime

from pydantic import Field

from townhall.schemas.common import CamelModel


class LikeCreate(CamelModel):
    user_id: int = Field(ge=1)
    discussion_id: int = Field(ge=1)


class LikeResponse(CamelModel):
    id: int
    user_id: int
    discussion_id: int
    created_at: datetime
