"""
Townhall Backend — Hashtag Service
====================================

What:  Business rules for hashtags, plus the name normalization shared
       with DiscussionService.

Normalization:
    "  #Python " → "python". After stripping whitespace and one leading
    '#', the name must be 1-50 characters of [a-z0-9_].
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

from townhall.exceptions import ConflictError, NotFoundError, ValidationError
from townhall.models.hashtag import Hashtag
from townhall.repositories import HashtagRepository
from townhall.schemas.hashtag import HashtagCreate, HashtagResponse, HashtagUpdate

logger = logging.getLogger(__name__)

HASHTAG_PATTERN = re.compile(r"^[a-z0-9_]{1,50}$")


def normalize_hashtag_name(raw: str, field: str = "name") -> str:
    """
    Normalize a hashtag name.

    Raises:
        ValidationError: The normalized name is empty, too long or has
            characters outside [a-z0-9_].
    """
    name = raw.strip()
    if name.startswith("#"):
        name = name[1:]
    name = name.lower()
    if not HASHTAG_PATTERN.match(name):
        raise ValidationError(
            message=(
                f"Invalid hashtag '{raw}'. Use 1-50 letters, digits or underscores, "
                "optionally prefixed with '#'"
            ),
            field=field,
        )
    return name


def normalize_hashtag_names(raw_names: Iterable[str], field: str = "hashtags") -> List[str]:
    """Normalize and de-duplicate, keeping first-seen order."""
    names: List[str] = []
    for raw in raw_names:
        name = normalize_hashtag_name(raw, field=field)
        if name not in names:
            names.append(name)
    return names


class HashtagService:
    """
    Business logic layer for hashtag operations.

    Who:     Called by the /api/hashtags routes. DiscussionService creates
             hashtags on first use through the repository directly.

    Responsibilities:
        - create_hashtag() / update_hashtag(): normalize, then enforce a
          unique name
        - get_hashtag() / list_hashtags() / search_hashtags()
        - delete_hashtag(): drop discussion links, then the hashtag
    """

    def __init__(self, hashtags: HashtagRepository):
        self.hashtags = hashtags

    async def create_hashtag(self, data: HashtagCreate) -> HashtagResponse:
        """
        Create a hashtag from a raw name such as "#Python".

        Raises:
            ValidationError: The normalized name is not [a-z0-9_]{1,50} (→ 400)
            ConflictError: A hashtag with that name exists (→ 409)
        """
        name = normalize_hashtag_name(data.name)
        await self._ensure_unique(name)
        hashtag = await self.hashtags.create(Hashtag(name=name))
        logger.info("Hashtag created: %s (%s)", hashtag.id, name)
        return HashtagResponse.model_validate(hashtag)

    async def get_hashtag(self, hashtag_id: int) -> HashtagResponse:
        """Raises NotFoundError when no hashtag has ``hashtag_id``."""
        return HashtagResponse.model_validate(await self._require(hashtag_id))

    async def list_hashtags(
        self, limit: Optional[int] = None, offset: int = 0
    ) -> Tuple[List[HashtagResponse], int]:
        """All hashtags ordered by name, with the unpaginated total."""
        hashtags = await self.hashtags.find_all(limit=limit, offset=offset)
        total = await self.hashtags.count()
        return [HashtagResponse.model_validate(h) for h in hashtags], total

    async def search_hashtags(
        self, name: str, limit: Optional[int] = None, offset: int = 0
    ) -> Tuple[List[HashtagResponse], int]:
        """
        Hashtags whose name contains ``name``, ignoring case and a leading '#'.

        Raises:
            ValidationError: Nothing is left of the term after stripping (→ 400)
        """
        term = name.strip().lstrip("#").strip()
        if not term:
            raise ValidationError(
                message="Search term is empty once the '#' prefix is removed",
                field="name",
            )
        hashtags = await self.hashtags.find_by_name_containing(term, limit=limit, offset=offset)
        total = await self.hashtags.count_by_name_containing(term)
        return [HashtagResponse.model_validate(h) for h in hashtags], total

    async def update_hashtag(self, hashtag_id: int, data: HashtagUpdate) -> HashtagResponse:
        """
        Rename a hashtag. Discussions linked to it show the new name.

        Raises:
            NotFoundError: No hashtag has ``hashtag_id`` (→ 404)
            ValidationError: The new name is invalid (→ 400)
            ConflictError: Another hashtag already has the name (→ 409)
        """
        await self._require(hashtag_id)
        name = normalize_hashtag_name(data.name)
        await self._ensure_unique(name, exclude_id=hashtag_id)
        hashtag = await self.hashtags.update(hashtag_id, {"name": name})
        if hashtag is None:
            raise NotFoundError(resource="hashtag", resource_id=hashtag_id)
        return HashtagResponse.model_validate(hashtag)

    async def delete_hashtag(self, hashtag_id: int) -> None:
        """Delete a hashtag and its discussion links; discussions stay."""
        await self._require(hashtag_id)
        unlinked = await self.hashtags.unlink_hashtag(hashtag_id)
        if not await self.hashtags.delete(hashtag_id):
            raise NotFoundError(resource="hashtag", resource_id=hashtag_id)
        logger.info("Hashtag %s deleted, %d discussion links removed", hashtag_id, unlinked)

    async def _require(self, hashtag_id: int) -> Hashtag:
        hashtag = await self.hashtags.find_by_id(hashtag_id)
        if hashtag is None:
            raise NotFoundError(resource="hashtag", resource_id=hashtag_id)
        return hashtag

    async def _ensure_unique(self, name: str, exclude_id: Optional[int] = None) -> None:
        existing = await self.hashtags.find_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(
                resource="hashtag",
                message=f"Hashtag '{name}' already exists",
                resource_id=existing.id,
            )
