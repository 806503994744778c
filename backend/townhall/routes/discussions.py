"""
Townhall Backend — Discussion Route Handlers
==============================================

What:  CRUD, text search and filtered listing for discussions, plus the
       comments and likes of one discussion.

Filters on GET /api/discussions:
    userId   only discussions by this author
    hashtag  only discussions tagged with this name ('#' optional)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response

from townhall.dependencies import (
    get_comment_service,
    get_discussion_service,
    get_like_service,
    pagination,
)
from townhall.schemas.comment import CommentResponse
from townhall.schemas.common import DeleteResponse, ErrorResponse, PaginationParams
from townhall.schemas.discussion import (
    DiscussionCreate,
    DiscussionResponse,
    DiscussionUpdate,
)
from townhall.schemas.like import LikeResponse
from townhall.security import require_user
from townhall.services import CommentService, DiscussionService, LikeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/discussions", tags=["Discussions"])

WRITE_ERRORS = {
    400: {"description": "Malformed payload or hashtag name", "model": ErrorResponse},
    401: {"description": "Missing or invalid credentials", "model": ErrorResponse},
}
NOT_FOUND = {404: {"description": "Discussion or user not found", "model": ErrorResponse}}


@router.post(
    "",
    response_model=DiscussionResponse,
    responses={**WRITE_ERRORS, **NOT_FOUND},
    summary="Post a discussion",
)
async def create_discussion(
    data: DiscussionCreate,
    _: str = Depends(require_user),
    service: DiscussionService = Depends(get_discussion_service),
) -> DiscussionResponse:
    return await service.create_discussion(data)


@router.get("", response_model=List[DiscussionResponse], summary="List discussions")
async def list_discussions(
    response: Response,
    user_id: Optional[int] = Query(default=None, alias="userId", ge=1),
    hashtag: Optional[str] = Query(default=None, min_length=1, max_length=51),
    page: PaginationParams = Depends(pagination),
    service: DiscussionService = Depends(get_discussion_service),
) -> List[DiscussionResponse]:
    discussions, total = await service.list_discussions(
        user_id=user_id, hashtag=hashtag, limit=page.limit, offset=page.offset
    )
    response.headers["X-Total-Count"] = str(total)
    return discussions


@router.get(
    "/search",
    response_model=List[DiscussionResponse],
    summary="Search discussions by text",
    description="Case-insensitive substring match on the discussion text.",
)
async def search_discussions(
    response: Response,
    text: str = Query(..., min_length=1, max_length=200),
    page: PaginationParams = Depends(pagination),
    service: DiscussionService = Depends(get_discussion_service),
) -> List[DiscussionResponse]:
    discussions, total = await service.search_discussions(
        text, limit=page.limit, offset=page.offset
    )
    response.headers["X-Total-Count"] = str(total)
    return discussions


@router.get(
    "/{discussion_id}",
    response_model=DiscussionResponse,
    responses=NOT_FOUND,
    summary="Get a discussion with hashtags and counts",
)
async def get_discussion(
    discussion_id: int = Path(..., ge=1),
    service: DiscussionService = Depends(get_discussion_service),
) -> DiscussionResponse:
    return await service.get_discussion(discussion_id)


@router.put(
    "/{discussion_id}",
    response_model=DiscussionResponse,
    responses={**WRITE_ERRORS, **NOT_FOUND},
    summary="Replace a discussion's text, image and hashtags",
)
async def update_discussion(
    data: DiscussionUpdate,
    discussion_id: int = Path(..., ge=1),
    _: str = Depends(require_user),
    service: DiscussionService = Depends(get_discussion_service),
) -> DiscussionResponse:
    return await service.update_discussion(discussion_id, data)


@router.delete(
    "/{discussion_id}",
    response_model=DeleteResponse,
    responses={**WRITE_ERRORS, **NOT_FOUND},
    summary="Delete a discussion with its comments and likes",
)
async def delete_discussion(
    discussion_id: int = Path(..., ge=1),
    _: str = Depends(require_user),
    service: DiscussionService = Depends(get_discussion_service),
) -> DeleteResponse:
    await service.delete_discussion(discussion_id)
    return DeleteResponse(message="Discussion deleted", id=discussion_id)


@router.get(
    "/{discussion_id}/comments",
    response_model=List[CommentResponse],
    responses=NOT_FOUND,
    summary="List a discussion's comments, oldest first",
)
async def list_discussion_comments(
    response: Response,
    discussion_id: int = Path(..., ge=1),
    page: PaginationParams = Depends(pagination),
    service: CommentService = Depends(get_comment_service),
) -> List[CommentResponse]:
    comments, total = await service.list_discussion_comments(
        discussion_id, limit=page.limit, offset=page.offset
    )
    response.headers["X-Total-Count"] = str(total)
    return comments


@router.get(
    "/{discussion_id}/likes",
    response_model=List[LikeResponse],
    responses=NOT_FOUND,
    summary="List a discussion's likes",
)
async def list_discussion_likes(
    response: Response,
    discussion_id: int = Path(..., ge=1),
    page: PaginationParams = Depends(pagination),
    service: LikeService = Depends(get_like_service),
) -> List[LikeResponse]:
    likes, total = await service.list_discussion_likes(
        discussion_id, limit=page.limit, offset=page.offset
    )
    response.headers["X-Total-Count"] = str(total)
    return likes
