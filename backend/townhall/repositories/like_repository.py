"""
Townhall Backend — Like Repository
====================================

What:  Data access for the `likes` table.
Who:   LikeService for create, read and delete; DiscussionService and
       UserService for counts and cascading deletes.

The (user_id, discussion_id) unique constraint surfaces here as
ConflictError when a duplicate is flushed.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy import Select, delete, func, or_, select

from townhall.models.like import Like
from townhall.repositories.base import Repository


class LikeRepository(Repository[Like]):
    """Likes, filterable by discussion and user."""

    model = Like
    resource = "like"

    def _filtered_query(
        self, discussion_id: Optional[int] = None, user_id: Optional[int] = None
    ) -> Select:
        stmt = select(Like)
        if discussion_id is not None:
            stmt = stmt.where(Like.discussion_id == discussion_id)
        if user_id is not None:
            stmt = stmt.where(Like.user_id == user_id)
        return stmt.order_by(*self.default_order())

    async def find_filtered(
        self,
        discussion_id: Optional[int] = None,
        user_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Like]:
        stmt = self._filtered_query(discussion_id=discussion_id, user_id=user_id)
        return await self._scalars(self._paginate(stmt, limit, offset))

    async def count_filtered(
        self, discussion_id: Optional[int] = None, user_id: Optional[int] = None
    ) -> int:
        return await self._count(
            self._filtered_query(discussion_id=discussion_id, user_id=user_id)
        )

    async def find_by_user_and_discussion(
        self, user_id: int, discussion_id: int
    ) -> Optional[Like]:
        """The like ``user_id`` gave ``discussion_id``, if any."""
        result = await self._execute(
            select(Like).where(
                Like.user_id == user_id, Like.discussion_id == discussion_id
            ),
            "find_by_user_and_discussion",
        )
        return result.scalar_one_or_none()

    async def count_by_discussions(self, discussion_ids: Iterable[int]) -> Dict[int, int]:
        """Like count per discussion id; ids without likes are absent."""
        ids = list(discussion_ids)
        if not ids:
            return {}
        result = await self._execute(
            select(Like.discussion_id, func.count(Like.id))
            .where(Like.discussion_id.in_(ids))
            .group_by(Like.discussion_id),
            "count_by_discussions",
        )
        return {discussion_id: count for discussion_id, count in result.all()}

    async def delete_for(
        self, discussion_ids: Iterable[int] = (), user_id: Optional[int] = None
    ) -> int:
        """Delete likes on any of ``discussion_ids`` or given by ``user_id``."""
        criteria = []
        ids = list(discussion_ids)
        if ids:
            criteria.append(Like.discussion_id.in_(ids))
        if user_id is not None:
            criteria.append(Like.user_id == user_id)
        if not criteria:
            return 0
        result = await self._execute(delete(Like).where(or_(*criteria)), "delete_for")
        return result.rowcount
