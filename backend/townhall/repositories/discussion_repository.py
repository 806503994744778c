"""
Data access for discussions.

Listing is newest first. Filters combine with AND: author, hashtag name
(through the join table) and a case-insensitive text fragment.
"""

from typing import List, Optional

from sqlalchemy import Select, delete, select

from townhall.models.discussion import Discussion, discussion_hashtags
from townhall.models.hashtag import Hashtag
from townhall.repositories.base import Repository, contains_pattern


class DiscussionRepository(Repository[Discussion]):
    """Discussions, newest first, with author, hashtag and text filters."""

    model = Discussion
    resource = "discussion"

    def default_order(self):
        return (Discussion.created_at.desc(), Discussion.id.desc())

    def _filtered_query(
        self,
        user_id: Optional[int] = None,
        hashtag: Optional[str] = None,
        text: Optional[str] = None,
    ) -> Select:
        stmt = select(Discussion)
        if user_id is not None:
            stmt = stmt.where(Discussion.user_id == user_id)
        if hashtag is not None:
            stmt = (
                stmt.join(
                    discussion_hashtags,
                    discussion_hashtags.c.discussion_id == Discussion.id,
                )
                .join(Hashtag, Hashtag.id == discussion_hashtags.c.hashtag_id)
                .where(Hashtag.name == hashtag)
            )
        if text is not None:
            stmt = stmt.where(Discussion.text.ilike(contains_pattern(text), escape="\\"))
        return stmt.order_by(*self.default_order())

    async def find_filtered(
        self,
        user_id: Optional[int] = None,
        hashtag: Optional[str] = None,
        text: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Discussion]:
        stmt = self._filtered_query(user_id=user_id, hashtag=hashtag, text=text)
        return await self._scalars(self._paginate(stmt, limit, offset))

    async def count_filtered(
        self,
        user_id: Optional[int] = None,
        hashtag: Optional[str] = None,
        text: Optional[str] = None,
    ) -> int:
        return await self._count(
            self._filtered_query(user_id=user_id, hashtag=hashtag, text=text)
        )

    async def find_ids_by_user(self, user_id: int) -> List[int]:
        """Ids of every discussion ``user_id`` authored, for cascading deletes."""
        result = await self._execute(
            select(Discussion.id).where(Discussion.user_id == user_id),
            "find_ids_by_user",
        )
        return list(result.scalars().all())

    async def delete_by_user(self, user_id: int) -> int:
        """Bulk delete; callers remove comments, likes and links first."""
        result = await self._execute(
            delete(Discussion).where(Discussion.user_id == user_id),
            "delete_by_user",
        )
        return result.rowcount
