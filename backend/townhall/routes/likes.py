"""
Like route handlers: /api/likes.

No PUT: a like has nothing to update. A repeated (userId, discussionId)
pair is answered with 409.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response

from townhall.dependencies import get_like_service, pagination
from townhall.schemas.common import DeleteResponse, ErrorResponse, PaginationParams
from townhall.schemas.like import LikeCreate, LikeResponse
from townhall.security import require_user
from townhall.services import LikeService

router = APIRouter(prefix="/api/likes", tags=["Likes"])

NOT_FOUND = {404: {"description": "Like, user or discussion not found", "model": ErrorResponse}}


@router.post(
    "",
    response_model=LikeResponse,
    responses={
        400: {"description": "Malformed payload", "model": ErrorResponse},
        401: {"description": "Missing or invalid credentials", "model": ErrorResponse},
        409: {"description": "User already likes this discussion", "model": ErrorResponse},
        **NOT_FOUND,
    },
    summary="Like a discussion",
)
async def create_like(
    data: LikeCreate,
    _: str = Depends(require_user),
    service: LikeService = Depends(get_like_service),
) -> LikeResponse:
    return await service.create_like(data)


@router.get("", response_model=List[LikeResponse], summary="List likes")
async def list_likes(
    response: Response,
    discussion_id: Optional[int] = Query(default=None, alias="discussionId", ge=1),
    user_id: Optional[int] = Query(default=None, alias="userId", ge=1),
    page: PaginationParams = Depends(pagination),
    service: LikeService = Depends(get_like_service),
) -> List[LikeResponse]:
    likes, total = await service.list_likes(
        discussion_id=discussion_id, user_id=user_id, limit=page.limit, offset=page.offset
    )
    response.headers["X-Total-Count"] = str(total)
    return likes


@router.get("/{like_id}", response_model=LikeResponse, responses=NOT_FOUND, summary="Get a like")
async def get_like(
    like_id: int = Path(..., ge=1),
    service: LikeService = Depends(get_like_service),
) -> LikeResponse:
    return await service.get_like(like_id)


@router.delete(
    "/{like_id}",
    response_model=DeleteResponse,
    responses={
        401: {"description": "Missing or invalid credentials", "model": ErrorResponse},
        **NOT_FOUND,
    },
    summary="Remove a like",
)
async def delete_like(
    like_id: int = Path(..., ge=1),
    _: str = Depends(require_user),
    service: LikeService = Depends(get_like_service),
) -> DeleteResponse:
    await service.delete_like(like_id)
    return DeleteResponse(message="Like deleted", id=like_id)
