"""
Townhall Backend — Comment Service
====================================

What:  Business rules for comments on discussions.
How:   Composes CommentRepository with the user and discussion repositories,
       which are only used to check that a comment's parents exist.
Who:   Called by the /api/comments routes and by
       GET /api/discussions/{id}/comments.

Rules:
    - a comment references an existing user and an existing discussion;
      a missing parent is a NotFoundError naming that parent
    - only the text can be updated; author, discussion and timestamp stay
    - listing is oldest first, the order a thread is read in
"""

import logging
from typing import List, Optional, Tuple

from townhall.exceptions import NotFoundError
from townhall.models.comment import Comment
from townhall.repositories import CommentRepository, DiscussionRepository, UserRepository
from townhall.schemas.comment import CommentCreate, CommentResponse, CommentUpdate

logger = logging.getLogger(__name__)


class CommentService:
    """
    Business logic layer for comment operations.

    Responsibilities:
        - create_comment(): parent checks, then insert
        - get_comment() / list_comments() / list_discussion_comments()
        - update_comment(): text-only overwrite
        - delete_comment(): delete one comment, NotFound when missing
    """

    def __init__(
        self,
        comments: CommentRepository,
        users: UserRepository,
        discussions: DiscussionRepository,
    ):
        self.comments = comments
        self.users = users
        self.discussions = discussions

    async def create_comment(self, data: CommentCreate) -> CommentResponse:
        """
        Add a comment to a discussion.

        Who:     Called by POST /api/comments.

        Raises:
            NotFoundError: The user or the discussion does not exist (→ 404)
            DatabaseError: The insert failed (→ 500)
        """
        if not await self.users.exists(data.user_id):
            raise NotFoundError(resource="user", resource_id=data.user_id)
        if not await self.discussions.exists(data.discussion_id):
            raise NotFoundError(resource="discussion", resource_id=data.discussion_id)

        comment = await self.comments.create(
            Comment(user_id=data.user_id, discussion_id=data.discussion_id, text=data.text)
        )
        logger.info(
            "Comment %s created on discussion %s by user %s",
            comment.id,
            data.discussion_id,
            data.user_id,
        )
        return CommentResponse.model_validate(comment)

    async def get_comment(self, comment_id: int) -> CommentResponse:
        """Raises NotFoundError when no comment has ``comment_id``."""
        return CommentResponse.model_validate(await self._require(comment_id))

    async def list_comments(
        self,
        discussion_id: Optional[int] = None,
        user_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[List[CommentResponse], int]:
        """
        Comments oldest first, optionally narrowed to one discussion and/or
        one author.

        Returns:
            (page of comments, total matching comments before pagination)
        """
        comments = await self.comments.find_filtered(
            discussion_id=discussion_id, user_id=user_id, limit=limit, offset=offset
        )
        total = await self.comments.count_filtered(discussion_id=discussion_id, user_id=user_id)
        return [CommentResponse.model_validate(c) for c in comments], total

    async def list_discussion_comments(
        self, discussion_id: int, limit: Optional[int] = None, offset: int = 0
    ) -> Tuple[List[CommentResponse], int]:
        """Like list_comments(discussion_id=...) but a missing discussion is a 404."""
        if not await self.discussions.exists(discussion_id):
            raise NotFoundError(resource="discussion", resource_id=discussion_id)
        return await self.list_comments(discussion_id=discussion_id, limit=limit, offset=offset)

    async def update_comment(self, comment_id: int, data: CommentUpdate) -> CommentResponse:
        """
        Replace a comment's text.

        Who:     Called by PUT /api/comments/{id}.

        Raises:
            NotFoundError: No comment has ``comment_id`` (→ 404)
        """
        await self._require(comment_id)
        comment = await self.comments.update(comment_id, {"text": data.text})
        if comment is None:
            raise NotFoundError(resource="comment", resource_id=comment_id)
        return CommentResponse.model_validate(comment)

    async def delete_comment(self, comment_id: int) -> None:
        await self._require(comment_id)
        if not await self.comments.delete(comment_id):
            raise NotFoundError(resource="comment", resource_id=comment_id)
        logger.info("Comment %s deleted", comment_id)

    async def _require(self, comment_id: int) -> Comment:
        comment = await self.comments.find_by_id(comment_id)
        if comment is None:
            raise NotFoundError(resource="comment", resource_id=comment_id)
        return comment
