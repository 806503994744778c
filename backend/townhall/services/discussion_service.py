"""
Townhall Backend — Discussion Service
=======================================

What:  Business rules for discussions and their hashtag association.
Who:   Called by the /api/discussions and /api/users/{id}/discussions routes.

Workflow (create):
    1. Resolve the author; missing user → NotFoundError("user")
    2. Normalize hashtag names (ValidationError on a bad name)
    3. Insert the discussion
    4. Look up existing hashtags, create the missing ones, insert links
    5. Return the discussion with hashtags and zero counts

Responses are assembled in batches: one query each for hashtag names,
comment counts and like counts, whatever the number of discussions.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from townhall.exceptions import NotFoundError
from townhall.models.discussion import Discussion
from townhall.models.hashtag import Hashtag
from townhall.repositories import (
    CommentRepository,
    DiscussionRepository,
    HashtagRepository,
    LikeRepository,
    UserRepository,
)
from townhall.schemas.discussion import (
    DiscussionCreate,
    DiscussionResponse,
    DiscussionUpdate,
)
from townhall.services.hashtag_service import (
    normalize_hashtag_name,
    normalize_hashtag_names,
)

logger = logging.getLogger(__name__)


class DiscussionService:
    """Business logic layer for discussion operations."""

    def __init__(
        self,
        discussions: DiscussionRepository,
        users: UserRepository,
        comments: CommentRepository,
        likes: LikeRepository,
        hashtags: HashtagRepository,
    ):
        self.discussions = discussions
        self.users = users
        self.comments = comments
        self.likes = likes
        self.hashtags = hashtags

    async def create_discussion(self, data: DiscussionCreate) -> DiscussionResponse:
        if not await self.users.exists(data.user_id):
            raise NotFoundError(resource="user", resource_id=data.user_id)
        names = normalize_hashtag_names(data.hashtags)

        discussion = await self.discussions.create(
            Discussion(user_id=data.user_id, text=data.text, image=data.image)
        )
        await self._attach_hashtags(discussion.id, names)
        logger.info(
            "Discussion %s created by user %s with %d hashtags",
            discussion.id,
            data.user_id,
            len(names),
        )
        return self._build(discussion, hashtags=sorted(names))

    async def get_discussion(self, discussion_id: int) -> DiscussionResponse:
        discussion = await self._require(discussion_id)
        responses = await self._to_responses([discussion])
        return responses[0]

    async def list_discussions(
        self,
        user_id: Optional[int] = None,
        hashtag: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[List[DiscussionResponse], int]:
        """Newest first, optionally filtered by author and/or hashtag name."""
        if hashtag is not None:
            hashtag = normalize_hashtag_name(hashtag, field="hashtag")
        discussions = await self.discussions.find_filtered(
            user_id=user_id, hashtag=hashtag, limit=limit, offset=offset
        )
        total = await self.discussions.count_filtered(user_id=user_id, hashtag=hashtag)
        return await self._to_responses(discussions), total

    async def list_user_discussions(
        self, user_id: int, limit: Optional[int] = None, offset: int = 0
    ) -> Tuple[List[DiscussionResponse], int]:
        """Like list_discussions(user_id=...) but a missing user is a 404."""
        if not await self.users.exists(user_id):
            raise NotFoundError(resource="user", resource_id=user_id)
        return await self.list_discussions(user_id=user_id, limit=limit, offset=offset)

    async def search_discussions(
        self, text: str, limit: Optional[int] = None, offset: int = 0
    ) -> Tuple[List[DiscussionResponse], int]:
        discussions = await self.discussions.find_filtered(text=text, limit=limit, offset=offset)
        total = await self.discussions.count_filtered(text=text)
        return await self._to_responses(discussions), total

    async def update_discussion(
        self, discussion_id: int, data: DiscussionUpdate
    ) -> DiscussionResponse:
        """Overwrite text, image and the hashtag set. Author and timestamp stay."""
        await self._require(discussion_id)
        names = normalize_hashtag_names(data.hashtags)

        discussion = await self.discussions.update(
            discussion_id, {"text": data.text, "image": data.image}
        )
        if discussion is None:
            raise NotFoundError(resource="discussion", resource_id=discussion_id)

        await self.hashtags.unlink_discussions([discussion_id])
        await self._attach_hashtags(discussion_id, names)
        logger.info("Discussion %s updated", discussion_id)

        responses = await self._to_responses([discussion])
        return responses[0]

    async def delete_discussion(self, discussion_id: int) -> None:
        """Delete a discussion with its comments, likes and hashtag links."""
        await self._require(discussion_id)
        likes = await self.likes.delete_for([discussion_id])
        comments = await self.comments.delete_for([discussion_id])
        await self.hashtags.unlink_discussions([discussion_id])
        if not await self.discussions.delete(discussion_id):
            raise NotFoundError(resource="discussion", resource_id=discussion_id)
        logger.info(
            "Discussion %s deleted with %d comments and %d likes",
            discussion_id,
            comments,
            likes,
        )

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _require(self, discussion_id: int) -> Discussion:
        discussion = await self.discussions.find_by_id(discussion_id)
        if discussion is None:
            raise NotFoundError(resource="discussion", resource_id=discussion_id)
        return discussion

    async def _attach_hashtags(self, discussion_id: int, names: Sequence[str]) -> None:
        """Get-or-create each hashtag by name and link it to the discussion."""
        if not names:
            return
        existing = {h.name: h for h in await self.hashtags.find_by_names(names)}
        hashtag_ids = []
        for name in names:
            hashtag = existing.get(name)
            if hashtag is None:
                hashtag = await self.hashtags.create(Hashtag(name=name))
                logger.debug("Hashtag created on first use: %s", name)
            hashtag_ids.append(hashtag.id)
        await self.hashtags.link(discussion_id, hashtag_ids)

    async def _to_responses(
        self, discussions: Sequence[Discussion]
    ) -> List[DiscussionResponse]:
        ids = [d.id for d in discussions]
        names = await self.hashtags.names_for_discussions(ids)
        comment_counts = await self.comments.count_by_discussions(ids)
        like_counts = await self.likes.count_by_discussions(ids)
        return [
            self._build(
                d,
                hashtags=names.get(d.id, []),
                comment_count=comment_counts.get(d.id, 0),
                like_count=like_counts.get(d.id, 0),
            )
            for d in discussions
        ]

    @staticmethod
    def _build(
        discussion: Discussion,
        hashtags: List[str],
        comment_count: int = 0,
        like_count: int = 0,
    ) -> DiscussionResponse:
        return DiscussionResponse(
            id=discussion.id,
            user_id=discussion.user_id,
            text=discussion.text,
            image=discussion.image,
            created_at=discussion.created_at,
            hashtags=hashtags,
            comment_count=comment_count,
            like_count=like_count,
        )
