"""Request and response bodies for /api/hashtags."""

from pydantic import Field

from townhall.schemas.common import CamelModel


class HashtagCreate(CamelModel):
    """
    Body of POST /api/hashtags and PUT /api/hashtags/{id}.

    The name is normalized by the service: leading '#' removed, lower-cased.
    """

    name: str = Field(min_length=1, max_length=51, description="Tag name, '#' optional")


class HashtagUpdate(HashtagCreate):
    pass


class HashtagResponse(CamelModel):
    id: int
    name: str
