"""
Townhall Backend — Services Layer
===================================

What:  Business rules between routes (HTTP) and repositories (persistence).
How:   Each service is constructed with the repositories it needs and
       returns response schemas. Missing records become NotFoundError,
       uniqueness violations become ConflictError.

Service Inventory:
    - UserService:       CRUD, name search, cascading user delete
    - DiscussionService: CRUD, hashtag association, aggregate counts
    - CommentService:    CRUD with user/discussion integrity checks
    - LikeService:       create/delete, one like per (user, discussion)
    - HashtagService:    CRUD with name normalization
"""

from townhall.services.user_service import UserService
from townhall.services.discussion_service import DiscussionService
from townhall.services.comment_service import CommentService
from townhall.services.like_service import LikeService
from townhall.services.hashtag_service import HashtagService

__all__ = [
    "UserService",
    "DiscussionService",
    "CommentService",
    "LikeService",
    "HashtagService",
]
