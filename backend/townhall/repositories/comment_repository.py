"""
Townhall Backend — Comment Repository
=======================================

What:  Data access for the `comments` table.
Who:   CommentService for CRUD; DiscussionService and UserService for
       counts and cascading deletes.

Listing is oldest first, the order a thread is read in.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy import Select, delete, func, or_, select

from townhall.models.comment import Comment
from townhall.repositories.base import Repository


class CommentRepository(Repository[Comment]):
    """Comments, filterable by discussion and author."""

    model = Comment
    resource = "comment"

    def default_order(self):
        return (Comment.created_at.asc(), Comment.id.asc())

    def _filtered_query(
        self, discussion_id: Optional[int] = None, user_id: Optional[int] = None
    ) -> Select:
        stmt = select(Comment)
        if discussion_id is not None:
            stmt = stmt.where(Comment.discussion_id == discussion_id)
        if user_id is not None:
            stmt = stmt.where(Comment.user_id == user_id)
        return stmt.order_by(*self.default_order())

    async def find_filtered(
        self,
        discussion_id: Optional[int] = None,
        user_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Comment]:
        """Oldest first; ``None`` filters are ignored."""
        stmt = self._filtered_query(discussion_id=discussion_id, user_id=user_id)
        return await self._scalars(self._paginate(stmt, limit, offset))

    async def count_filtered(
        self, discussion_id: Optional[int] = None, user_id: Optional[int] = None
    ) -> int:
        return await self._count(
            self._filtered_query(discussion_id=discussion_id, user_id=user_id)
        )

    async def count_by_discussions(self, discussion_ids: Iterable[int]) -> Dict[int, int]:
        """Comment count per discussion id; ids without comments are absent."""
        ids = list(discussion_ids)
        if not ids:
            return {}
        result = await self._execute(
            select(Comment.discussion_id, func.count(Comment.id))
            .where(Comment.discussion_id.in_(ids))
            .group_by(Comment.discussion_id),
            "count_by_discussions",
        )
        return {discussion_id: count for discussion_id, count in result.all()}

    async def delete_for(
        self, discussion_ids: Iterable[int] = (), user_id: Optional[int] = None
    ) -> int:
        """Delete comments on any of ``discussion_ids`` or written by ``user_id``."""
        criteria = []
        ids = list(discussion_ids)
        if ids:
            criteria.append(Comment.discussion_id.in_(ids))
        if user_id is not None:
            criteria.append(Comment.user_id == user_id)
        if not criteria:
            return 0
        result = await self._execute(delete(Comment).where(or_(*criteria)), "delete_for")
        return result.rowcount
