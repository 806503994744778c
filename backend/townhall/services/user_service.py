"""
Townhall Backend — User Service
=================================

What:  Business rules for users.
Who:   Called by the /api/users route handlers.

Rules:
    - email and mobile number are unique across users (409 otherwise)
    - update overwrites name, mobile number and email; id is untouched
    - delete removes everything the user owns: their likes and comments,
      their discussions, and the comments, likes and hashtag links
      hanging off those discussions
"""

import logging
from typing import List, Optional, Tuple

from townhall.exceptions import ConflictError, NotFoundError
from townhall.models.user import User
from townhall.repositories import (
    CommentRepository,
    DiscussionRepository,
    HashtagRepository,
    LikeRepository,
    UserRepository,
)
from townhall.schemas.user import UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Business logic layer for user operations."""

    def __init__(
        self,
        users: UserRepository,
        discussions: DiscussionRepository,
        comments: CommentRepository,
        likes: LikeRepository,
        hashtags: HashtagRepository,
    ):
        self.users = users
        self.discussions = discussions
        self.comments = comments
        self.likes = likes
        self.hashtags = hashtags

    async def create_user(self, data: UserCreate) -> UserResponse:
        await self._ensure_unique(data.email, data.mobile_no)
        user = await self.users.create(
            User(name=data.name, mobile_no=data.mobile_no, email=data.email)
        )
        logger.info("User created: %s", user.id)
        return UserResponse.model_validate(user)

    async def get_user(self, user_id: int) -> UserResponse:
        return UserResponse.model_validate(await self._require(user_id))

    async def list_users(
        self, limit: Optional[int] = None, offset: int = 0
    ) -> Tuple[List[UserResponse], int]:
        users = await self.users.find_all(limit=limit, offset=offset)
        total = await self.users.count()
        return [UserResponse.model_validate(u) for u in users], total

    async def search_users(
        self, name: str, limit: Optional[int] = None, offset: int = 0
    ) -> Tuple[List[UserResponse], int]:
        """Users whose name contains ``name``, case-insensitively."""
        users = await self.users.find_by_name_containing(name, limit=limit, offset=offset)
        total = await self.users.count_by_name_containing(name)
        return [UserResponse.model_validate(u) for u in users], total

    async def update_user(self, user_id: int, data: UserUpdate) -> UserResponse:
        await self._require(user_id)
        await self._ensure_unique(data.email, data.mobile_no, exclude_id=user_id)
        user = await self.users.update(
            user_id,
            {"name": data.name, "mobile_no": data.mobile_no, "email": data.email},
        )
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        logger.info("User updated: %s", user_id)
        return UserResponse.model_validate(user)

    async def delete_user(self, user_id: int) -> None:
        """
        Delete a user and everything hanging off it.

        Order matters on stores without ON DELETE CASCADE: children first,
        then the user's discussions, then the user.
        """
        await self._require(user_id)

        discussion_ids = await self.discussions.find_ids_by_user(user_id)
        likes = await self.likes.delete_for(discussion_ids, user_id=user_id)
        comments = await self.comments.delete_for(discussion_ids, user_id=user_id)
        await self.hashtags.unlink_discussions(discussion_ids)
        await self.discussions.delete_by_user(user_id)

        if not await self.users.delete(user_id):
            raise NotFoundError(resource="user", resource_id=user_id)

        logger.info(
            "User %s deleted with %d discussions, %d comments, %d likes",
            user_id,
            len(discussion_ids),
            comments,
            likes,
        )

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _require(self, user_id: int) -> User:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return user

    async def _ensure_unique(
        self, email: str, mobile_no: str, exclude_id: Optional[int] = None
    ) -> None:
        existing = await self.users.find_by_email(email)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(
                resource="user",
                message="A user with this email already exists",
                resource_id=existing.id,
                context={"field": "email"},
            )
        existing = await self.users.find_by_mobile_no(mobile_no)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(
                resource="user",
                message="A user with this mobile number already exists",
                resource_id=existing.id,
                context={"field": "mobileNo"},
            )
