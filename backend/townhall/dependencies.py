"""
Townhall Backend — Request-Scoped Composition
===============================================

What:  FastAPI dependencies that assemble the object graph for one request:
       session → repositories → service.
How:   Every service receives its repositories as constructor arguments;
       every repository shares the request's session, so one request is
       one transaction.
"""

from typing import Optional

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from townhall.config import settings
from townhall.database import get_db_session
from townhall.repositories import (
    CommentRepository,
    DiscussionRepository,
    HashtagRepository,
    LikeRepository,
    UserRepository,
)
from townhall.schemas.common import PaginationParams
from townhall.services import (
    CommentService,
    DiscussionService,
    HashtagService,
    LikeService,
    UserService,
)


def pagination(
    limit: Optional[int] = Query(
        default=None,
        ge=1,
        le=settings.max_page_limit,
        description="Maximum items to return. Omit to return all.",
    ),
    offset: int = Query(default=0, ge=0, description="Items to skip"),
) -> PaginationParams:
    return PaginationParams(limit=limit, offset=offset)


def get_user_service(db: AsyncSession = Depends(get_db_session)) -> UserService:
    return UserService(
        users=UserRepository(db),
        discussions=DiscussionRepository(db),
        comments=CommentRepository(db),
        likes=LikeRepository(db),
        hashtags=HashtagRepository(db),
    )


def get_discussion_service(db: AsyncSession = Depends(get_db_session)) -> DiscussionService:
    return DiscussionService(
        discussions=DiscussionRepository(db),
        users=UserRepository(db),
        comments=CommentRepository(db),
        likes=LikeRepository(db),
        hashtags=HashtagRepository(db),
    )


def get_comment_service(db: AsyncSession = Depends(get_db_session)) -> CommentService:
    return CommentService(
        comments=CommentRepository(db),
        users=UserRepository(db),
        discussions=DiscussionRepository(db),
    )


def get_like_service(db: AsyncSession = Depends(get_db_session)) -> LikeService:
    return LikeService(
        likes=LikeRepository(db),
        users=UserRepository(db),
        discussions=DiscussionRepository(db),
    )


def get_hashtag_service(db: AsyncSession = Depends(get_db_session)) -> HashtagService:
    return HashtagService(hashtags=HashtagRepository(db))
