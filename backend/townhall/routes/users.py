"""
Townhall Backend — User Route Handlers
========================================

What:  CRUD and name search for users, plus the user's discussions.
Who:   Called by API clients; writes need HTTP Basic credentials.

Example:
    POST /api/users {"name": "Ana", "mobileNo": "555", "email": "a@x.com"}
      → 200 {"id": 1, "name": "Ana", "mobileNo": "555", "email": "a@x.com"}
    GET /api/users/search?name=an → [{"id": 1, ...}]
    DELETE /api/users/1 → 200 {"message": "User deleted", "id": 1}
    GET /api/users/1 → 404
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Query, Response

from townhall.dependencies import get_discussion_service, get_user_service, pagination
from townhall.schemas.common import DeleteResponse, ErrorResponse, PaginationParams
from townhall.schemas.discussion import DiscussionResponse
from townhall.schemas.user import UserCreate, UserResponse, UserUpdate
from townhall.security import require_user
from townhall.services import DiscussionService, UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])

WRITE_ERRORS = {
    400: {"description": "Malformed payload", "model": ErrorResponse},
    401: {"description": "Missing or invalid credentials", "model": ErrorResponse},
    409: {"description": "Email or mobile number already in use", "model": ErrorResponse},
}
NOT_FOUND = {404: {"description": "User not found", "model": ErrorResponse}}


@router.post(
    "",
    response_model=UserResponse,
    responses=WRITE_ERRORS,
    summary="Create a user",
)
async def create_user(
    data: UserCreate,
    _: str = Depends(require_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.create_user(data)


@router.get("", response_model=List[UserResponse], summary="List users")
async def list_users(
    response: Response,
    page: PaginationParams = Depends(pagination),
    service: UserService = Depends(get_user_service),
) -> List[UserResponse]:
    users, total = await service.list_users(limit=page.limit, offset=page.offset)
    response.headers["X-Total-Count"] = str(total)
    return users


@router.get(
    "/search",
    response_model=List[UserResponse],
    summary="Search users by name",
    description="Case-insensitive substring match on the user's name.",
)
async def search_users(
    response: Response,
    name: str = Query(..., min_length=1, max_length=100, description="Name fragment"),
    page: PaginationParams = Depends(pagination),
    service: UserService = Depends(get_user_service),
) -> List[UserResponse]:
    users, total = await service.search_users(name, limit=page.limit, offset=page.offset)
    response.headers["X-Total-Count"] = str(total)
    return users


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses=NOT_FOUND,
    summary="Get a user by ID",
)
async def get_user(
    user_id: int = Path(..., ge=1),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.get_user(user_id)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={**WRITE_ERRORS, **NOT_FOUND},
    summary="Replace a user's name, mobile number and email",
)
async def update_user(
    data: UserUpdate,
    user_id: int = Path(..., ge=1),
    _: str = Depends(require_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.update_user(user_id, data)


@router.delete(
    "/{user_id}",
    response_model=DeleteResponse,
    responses={**WRITE_ERRORS, **NOT_FOUND},
    summary="Delete a user and everything the user owns",
)
async def delete_user(
    user_id: int = Path(..., ge=1),
    _: str = Depends(require_user),
    service: UserService = Depends(get_user_service),
) -> DeleteResponse:
    await service.delete_user(user_id)
    return DeleteResponse(message="User deleted", id=user_id)


@router.get(
    "/{user_id}/discussions",
    response_model=List[DiscussionResponse],
    responses=NOT_FOUND,
    summary="List a user's discussions, newest first",
)
async def list_user_discussions(
    response: Response,
    user_id: int = Path(..., ge=1),
    page: PaginationParams = Depends(pagination),
    service: DiscussionService = Depends(get_discussion_service),
) -> List[DiscussionResponse]:
    discussions, total = await service.list_user_discussions(
        user_id, limit=page.limit, offset=page.offset
    )
    response.headers["X-Total-Count"] = str(total)
    return discussions
