"""Checklist endpoints for the API."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.checklist import schemas
from components.checklist.repository import ChecklistRepository
from components.core.cache import ChangeEvent, ChangeFeed
from components.core.init_db import get_db, get_feed
from components.user.models import User
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/checklist",
    tags=["checklist"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=schemas.Checklist)
async def read_checklist(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Get the checklist with the current user's progress.

    Returns categories with their items (global items plus the user's custom
    items) and an overall summary with a status of not_started, in_progress,
    almost_done or complete.
    """
    return await ChecklistRepository(db).get_checklist(current_user.id)


@router.put("/items/{item_id}", response_model=schemas.Progress)
async def update_item_progress(
    item_id: int,
    changes: schemas.ProgressUpdate,
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Mark an item complete or incomplete and/or update its notes."""
    repo = ChecklistRepository(db)
    if await repo.get_visible_item(current_user.id, item_id) is None:
        raise HTTPException(status_code=404, detail="Checklist item not found")

    progress = await repo.progress.set_progress(current_user.id, item_id, changes.is_completed, changes.notes)
    await feed.publish(ChangeEvent("user_checklist_progress", current_user.id, "UPSERT", progress.id))
    return progress


@router.post("/items", response_model=schemas.ChecklistItem, status_code=status.HTTP_201_CREATED)
async def create_custom_item(
    item: schemas.CustomItemCreate,
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Add a custom item, visible only to the current user."""
    repo = ChecklistRepository(db)
    if await repo.get_category(item.category_id) is None:
        raise HTTPException(status_code=404, detail="Checklist category not found")
    if not item.title.strip():
        raise HTTPException(status_code=422, detail="Title cannot be empty")

    created = await repo.create_item(
        category_id=item.category_id,
        title=item.title,
        description=item.description,
        is_required=item.is_required,
        created_by=current_user.id,
    )
    await feed.publish(ChangeEvent("checklist_items", current_user.id, "INSERT", created.id))
    return schemas.ChecklistItem(
        id=created.id,
        category_id=created.category_id,
        title=created.title,
        description=created.description,
        is_required=created.is_required,
        sort_order=created.sort_order,
        is_custom=True,
    )


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_custom_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> None:
    """Delete one of the current user's custom items."""
    if not await ChecklistRepository(db).delete_custom_item(current_user.id, item_id):
        raise HTTPException(status_code=404, detail="Custom checklist item not found")
    await feed.publish(ChangeEvent("checklist_items", current_user.id, "DELETE", item_id))
