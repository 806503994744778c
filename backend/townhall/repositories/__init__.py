"""
Townhall Backend — Repository Layer
=====================================

What:  Data access for one entity per class. Repositories know SQL and the
       session; they know nothing about HTTP or business rules.
How:   Each repository is constructed with the request's AsyncSession.
       Missing rows come back as None/False; services turn those into
       NotFoundError.
"""

from townhall.repositories.base import Repository
from townhall.repositories.user_repository import UserRepository
from townhall.repositories.discussion_repository import DiscussionRepository
from townhall.repositories.comment_repository import CommentRepository
from townhall.repositories.like_repository import LikeRepository
from townhall.repositories.hashtag_repository import HashtagRepository

__all__ = [
    "Repository",
    "UserRepository",
    "DiscussionRepository",
    "CommentRepository",
    "LikeRepository",
    "HashtagRepository",
]
