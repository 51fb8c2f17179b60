"""Resource library endpoints for the API."""

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.cache import ChangeEvent, ChangeFeed
from components.core.init_db import get_db, get_feed
from components.resources import schemas
from components.resources.repository import ResourceRepository
from components.user.models import User
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/resources",
    tags=["resources"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.Resource])
async def list_resources(
    category: Optional[str] = Query(None, description="Only this category"),
    type: Optional[schemas.ResourceType] = Query(None, description="article, video, pdf or link"),
    search: Optional[str] = Query(None, description="Text to find in title, description or author"),
    featured: Optional[bool] = Query(None, description="Only featured (true) or non-featured (false)"),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """List resources, featured first."""
    return await ResourceRepository(db).search(category, type, search, featured)


@router.get("/favorites", response_model=List[schemas.Resource])
async def list_favorites(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """The current user's favorite resources, most recent first."""
    resources = await ResourceRepository(db).list_favorites(current_user.id)
    return [
        schemas.Resource.model_validate(resource).model_copy(update={"is_favorite": True})
        for resource in resources
    ]


async def _set_favorite(resource_id: int, is_favorite: bool, db: AsyncSession, feed: ChangeFeed, user: User):
    repo = ResourceRepository(db)
    if await repo.get(resource_id) is None:
        raise HTTPException(status_code=404, detail="Resource not found")
    if is_favorite:
        await repo.favorites.add(user.id, resource_id)
    else:
        await repo.favorites.remove(user.id, resource_id)
    await feed.publish(ChangeEvent("user_resource_favorites", user.id, "UPSERT" if is_favorite else "DELETE"))
    return schemas.FavoriteStatus(resource_id=resource_id, is_favorite=is_favorite)


@router.post("/{resource_id}/favorite", response_model=schemas.FavoriteStatus)
async def add_favorite(
    resource_id: int,
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Add to favorites; repeating the call changes nothing."""
    return await _set_favorite(resource_id, True, db, feed, current_user)


@router.delete("/{resource_id}/favorite", response_model=schemas.FavoriteStatus)
async def remove_favorite(
    resource_id: int,
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Remove from favorites; repeating the call changes nothing."""
    return await _set_favorite(resource_id, False, db, feed, current_user)
