"""
Data access for hashtags and the discussion_hashtags join table.

The join table has no model class; link and unlink operations live here
and work on ids only.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, insert, select

from townhall.models.discussion import discussion_hashtags
from townhall.models.hashtag import Hashtag
from townhall.repositories.base import Repository, contains_pattern


class HashtagRepository(Repository[Hashtag]):
    """Hashtags ordered by name, plus the discussion_hashtags links."""

    model = Hashtag
    resource = "hashtag"

    def default_order(self):
        return (Hashtag.name,)

    def _name_query(self, substring: str):
        return (
            select(Hashtag)
            .where(Hashtag.name.ilike(contains_pattern(substring), escape="\\"))
            .order_by(*self.default_order())
        )

    async def find_by_name(self, name: str) -> Optional[Hashtag]:
        result = await self._execute(select(Hashtag).where(Hashtag.name == name), "find_by_name")
        return result.scalar_one_or_none()

    async def find_by_names(self, names: Iterable[str]) -> List[Hashtag]:
        """Existing hashtags among ``names``; missing names are simply absent."""
        wanted = list(names)
        if not wanted:
            return []
        return await self._scalars(select(Hashtag).where(Hashtag.name.in_(wanted)))

    async def find_by_name_containing(
        self, substring: str, limit: Optional[int] = None, offset: int = 0
    ) -> List[Hashtag]:
        stmt = self._paginate(self._name_query(substring), limit, offset)
        return await self._scalars(stmt)

    async def count_by_name_containing(self, substring: str) -> int:
        return await self._count(self._name_query(substring))

    # ── Discussion links ──────────────────────────────────────────────────

    async def link(self, discussion_id: int, hashtag_ids: Iterable[int]) -> None:
        rows = [
            {"discussion_id": discussion_id, "hashtag_id": hashtag_id}
            for hashtag_id in hashtag_ids
        ]
        if rows:
            await self._execute(insert(discussion_hashtags).values(rows), "link")

    async def unlink_discussions(self, discussion_ids: Iterable[int]) -> int:
        """Remove every hashtag link of the given discussions."""
        ids = list(discussion_ids)
        if not ids:
            return 0
        result = await self._execute(
            delete(discussion_hashtags).where(discussion_hashtags.c.discussion_id.in_(ids)),
            "unlink_discussions",
        )
        return result.rowcount

    async def unlink_hashtag(self, hashtag_id: int) -> int:
        """Remove a hashtag from every discussion that carries it."""
        result = await self._execute(
            delete(discussion_hashtags).where(discussion_hashtags.c.hashtag_id == hashtag_id),
            "unlink_hashtag",
        )
        return result.rowcount

    async def names_for_discussions(
        self, discussion_ids: Iterable[int]
    ) -> Dict[int, List[str]]:
        """Sorted hashtag names per discussion id; untagged ids are absent."""
        ids = list(discussion_ids)
        if not ids:
            return {}
        result = await self._execute(
            select(discussion_hashtags.c.discussion_id, Hashtag.name)
            .join(Hashtag, Hashtag.id == discussion_hashtags.c.hashtag_id)
            .where(discussion_hashtags.c.discussion_id.in_(ids))
            .order_by(Hashtag.name),
            "names_for_discussions",
        )
        names: Dict[int, List[str]] = defaultdict(list)
        for discussion_id, name in result.all():
            names[discussion_id].append(name)
        return dict(names)
