"""Hashtag route handlers: /api/hashtags."""

from typing import List

from fastapi import APIRouter, Depends, Path, Query, Response

from townhall.dependencies import get_hashtag_service, pagination
from townhall.schemas.common import DeleteResponse, ErrorResponse, PaginationParams
from townhall.schemas.hashtag import HashtagCreate, HashtagResponse, HashtagUpdate
from townhall.security import require_user
from townhall.services import HashtagService

router = APIRouter(prefix="/api/hashtags", tags=["Hashtags"])

WRITE_ERRORS = {
    400: {"description": "Invalid hashtag name", "model": ErrorResponse},
    401: {"description": "Missing or invalid credentials", "model": ErrorResponse},
    409: {"description": "Hashtag name already exists", "model": ErrorResponse},
}
NOT_FOUND = {404: {"description": "Hashtag not found", "model": ErrorResponse}}


@router.post("", response_model=HashtagResponse, responses=WRITE_ERRORS, summary="Create a hashtag")
async def create_hashtag(
    data: HashtagCreate,
    _: str = Depends(require_user),
    service: HashtagService = Depends(get_hashtag_service),
) -> HashtagResponse:
    return await service.create_hashtag(data)


@router.get("", response_model=List[HashtagResponse], summary="List hashtags by name")
async def list_hashtags(
    response: Response,
    page: PaginationParams = Depends(pagination),
    service: HashtagService = Depends(get_hashtag_service),
) -> List[HashtagResponse]:
    hashtags, total = await service.list_hashtags(limit=page.limit, offset=page.offset)
    response.headers["X-Total-Count"] = str(total)
    return hashtags


@router.get("/search", response_model=List[HashtagResponse], summary="Search hashtags by name")
async def search_hashtags(
    response: Response,
    name: str = Query(..., min_length=1, max_length=51),
    page: PaginationParams = Depends(pagination),
    service: HashtagService = Depends(get_hashtag_service),
) -> List[HashtagResponse]:
    hashtags, total = await service.search_hashtags(name, limit=page.limit, offset=page.offset)
    response.headers["X-Total-Count"] = str(total)
    return hashtags


@router.get("/{hashtag_id}", response_model=HashtagResponse, responses=NOT_FOUND, summary="Get a hashtag")
async def get_hashtag(
    hashtag_id: int = Path(..., ge=1),
    service: HashtagService = Depends(get_hashtag_service),
) -> HashtagResponse:
    return await service.get_hashtag(hashtag_id)


@router.put(
    "/{hashtag_id}",
    response_model=HashtagResponse,
    responses={**WRITE_ERRORS, **NOT_FOUND},
    summary="Rename a hashtag",
)
async def update_hashtag(
    data: HashtagUpdate,
    hashtag_id: int = Path(..., ge=1),
    _: str = Depends(require_user),
    service: HashtagService = Depends(get_hashtag_service),
) -> HashtagResponse:
    return await service.update_hashtag(hashtag_id, data)


@router.delete(
    "/{hashtag_id}",
    response_model=DeleteResponse,
    responses={**WRITE_ERRORS, **NOT_FOUND},
    summary="Delete a hashtag and its discussion links",
)
async def delete_hashtag(
    hashtag_id: int = Path(..., ge=1),
    _: str = Depends(require_user),
    service: HashtagService = Depends(get_hashtag_service),
) -> DeleteResponse:
    await service.delete_hashtag(hashtag_id)
    return DeleteResponse(message="Hashtag deleted", id=hashtag_id)
