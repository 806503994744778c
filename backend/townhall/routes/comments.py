"""Comment route handlers: /api/comments."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response

from townhall.dependencies import get_comment_service, pagination
from townhall.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from townhall.schemas.common import DeleteResponse, ErrorResponse, PaginationParams
from townhall.security import require_user
from townhall.services import CommentService

router = APIRouter(prefix="/api/comments", tags=["Comments"])

WRITE_ERRORS = {
    400: {"description": "Malformed payload", "model": ErrorResponse},
    401: {"description": "Missing or invalid credentials", "model": ErrorResponse},
}
NOT_FOUND = {404: {"description": "Comment, user or discussion not found", "model": ErrorResponse}}


@router.post(
    "",
    response_model=CommentResponse,
    responses={**WRITE_ERRORS, **NOT_FOUND},
    summary="Comment on a discussion",
)
async def create_comment(
    data: CommentCreate,
    _: str = Depends(require_user),
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    return await service.create_comment(data)


@router.get("", response_model=List[CommentResponse], summary="List comments")
async def list_comments(
    response: Response,
    discussion_id: Optional[int] = Query(default=None, alias="discussionId", ge=1),
    user_id: Optional[int] = Query(default=None, alias="userId", ge=1),
    page: PaginationParams = Depends(pagination),
    service: CommentService = Depends(get_comment_service),
) -> List[CommentResponse]:
    comments, total = await service.list_comments(
        discussion_id=discussion_id, user_id=user_id, limit=page.limit, offset=page.offset
    )
    response.headers["X-Total-Count"] = str(total)
    return comments


@router.get(
    "/{comment_id}",
    response_model=CommentResponse,
    responses=NOT_FOUND,
    summary="Get a comment by ID",
)
async def get_comment(
    comment_id: int = Path(..., ge=1),
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    return await service.get_comment(comment_id)


@router.put(
    "/{comment_id}",
    response_model=CommentResponse,
    responses={**WRITE_ERRORS, **NOT_FOUND},
    summary="Replace a comment's text",
)
async def update_comment(
    data: CommentUpdate,
    comment_id: int = Path(..., ge=1),
    _: str = Depends(require_user),
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    return await service.update_comment(comment_id, data)


@router.delete(
    "/{comment_id}",
    response_model=DeleteResponse,
    responses={**WRITE_ERRORS, **NOT_FOUND},
    summary="Delete a comment",
)
async def delete_comment(
    comment_id: int = Path(..., ge=1),
    _: str = Depends(require_user),
    service: CommentService = Depends(get_comment_service),
) -> DeleteResponse:
    await service.delete_comment(comment_id)
    return DeleteResponse(message="Comment deleted", id=comment_id)
