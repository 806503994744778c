"""
Townhall Backend — Like Service
=================================

What:  Business rules for likes on discussions.
How:   Composes LikeRepository with the user and discussion repositories,
       which are only used to check that a like's parents exist.
Who:   Called by the /api/likes routes and by
       GET /api/discussions/{id}/likes.

Rules:
    - a user likes a discussion at most once; a second like for the same
      pair is a ConflictError (409). The unique constraint on
      (user_id, discussion_id) catches concurrent duplicates the pre-check
      misses, and the repository maps that IntegrityError to the same 409.
    - likes have no mutable fields, so there is no update operation
"""

import logging
from typing import List, Optional, Tuple

from townhall.exceptions import ConflictError, NotFoundError
from townhall.models.like import Like
from townhall.repositories import DiscussionRepository, LikeRepository, UserRepository
from townhall.schemas.like import LikeCreate, LikeResponse

logger = logging.getLogger(__name__)


class LikeService:
    """
    Business logic layer for like operations.

    Responsibilities:
        - create_like(): parent checks, duplicate check, insert
        - get_like() / list_likes() / list_discussion_likes()
        - delete_like(): remove one like, NotFound when missing
    """

    def __init__(
        self,
        likes: LikeRepository,
        users: UserRepository,
        discussions: DiscussionRepository,
    ):
        self.likes = likes
        self.users = users
        self.discussions = discussions

    async def create_like(self, data: LikeCreate) -> LikeResponse:
        """
        Record that a user likes a discussion.

        Who:     Called by POST /api/likes.

        Raises:
            NotFoundError: The user or the discussion does not exist (→ 404)
            ConflictError: The user already likes this discussion (→ 409)
        """
        if not await self.users.exists(data.user_id):
            raise NotFoundError(resource="user", resource_id=data.user_id)
        if not await self.discussions.exists(data.discussion_id):
            raise NotFoundError(resource="discussion", resource_id=data.discussion_id)

        existing = await self.likes.find_by_user_and_discussion(data.user_id, data.discussion_id)
        if existing is not None:
            raise ConflictError(
                resource="like",
                message=(
                    f"User {data.user_id} already likes discussion {data.discussion_id}"
                ),
                resource_id=existing.id,
            )

        like = await self.likes.create(
            Like(user_id=data.user_id, discussion_id=data.discussion_id)
        )
        logger.info(
            "Like %s: user %s on discussion %s", like.id, data.user_id, data.discussion_id
        )
        return LikeResponse.model_validate(like)

    async def get_like(self, like_id: int) -> LikeResponse:
        """Raises NotFoundError when no like has ``like_id``."""
        like = await self.likes.find_by_id(like_id)
        if like is None:
            raise NotFoundError(resource="like", resource_id=like_id)
        return LikeResponse.model_validate(like)

    async def list_likes(
        self,
        discussion_id: Optional[int] = None,
        user_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[List[LikeResponse], int]:
        """
        Likes in creation order, optionally narrowed to one discussion
        and/or one user.

        Returns:
            (page of likes, total matching likes before pagination)
        """
        likes = await self.likes.find_filtered(
            discussion_id=discussion_id, user_id=user_id, limit=limit, offset=offset
        )
        total = await self.likes.count_filtered(discussion_id=discussion_id, user_id=user_id)
        return [LikeResponse.model_validate(like) for like in likes], total

    async def list_discussion_likes(
        self, discussion_id: int, limit: Optional[int] = None, offset: int = 0
    ) -> Tuple[List[LikeResponse], int]:
        """Like list_likes(discussion_id=...) but a missing discussion is a 404."""
        if not await self.discussions.exists(discussion_id):
            raise NotFoundError(resource="discussion", resource_id=discussion_id)
        return await self.list_likes(discussion_id=discussion_id, limit=limit, offset=offset)

    async def delete_like(self, like_id: int) -> None:
        """
        Remove a like (an "unlike").

        Raises:
            NotFoundError: No like has ``like_id`` (→ 404)
        """
        if not await self.likes.delete(like_id):
            raise NotFoundError(resource="like", resource_id=like_id)
        logger.info("Like %s deleted", like_id)
