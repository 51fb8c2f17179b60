"""Notification endpoints for the API."""

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.cache import ChangeEvent, ChangeFeed, QueryCache
from components.core.init_db import get_cache, get_db, get_feed
from components.notifications import schemas
from components.notifications.repository import NotificationRepository, PreferencesForm
from components.user.models import User
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/notifications",
    tags=["notifications"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.Notification])
async def list_notifications(
    unread_only: bool = Query(False, description="Only unread notifications"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """The current user's notifications, newest first."""
    return await NotificationRepository(db).list_recent(current_user.id, unread_only)


@router.get("/unread-count", response_model=schemas.UnreadCount)
async def unread_count(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    return schemas.UnreadCount(unread=await NotificationRepository(db).unread_count(current_user.id))


@router.get("/preferences", response_model=schemas.PreferencesView)
async def read_preferences(
    db: AsyncSession = Depends(get_db),
    cache: QueryCache = Depends(get_cache),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Saved preferences and the effective settings (everything on until saved)."""
    return await PreferencesForm(db, cache, feed).view(current_user.id)


@router.put("/preferences", response_model=schemas.PreferencesView)
async def save_preferences(
    body: schemas.PreferencesIn,
    db: AsyncSession = Depends(get_db),
    cache: QueryCache = Depends(get_cache),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    return await PreferencesForm(db, cache, feed).save(current_user.id, body.model_dump(exclude_unset=True))


@router.post("/read-all", response_model=schemas.UnreadCount)
async def mark_all_read(
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Mark every notification read; returns the new unread count."""
    repo = NotificationRepository(db)
    await repo.mark_all_read(current_user.id)
    await feed.publish(ChangeEvent("notifications", current_user.id, "UPDATE"))
    return schemas.UnreadCount(unread=await repo.unread_count(current_user.id))


@router.post("/{notification_id}/read", response_model=schemas.Notification)
async def mark_read(
    notification_id: int,
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    notification = await NotificationRepository(db).mark_read(current_user.id, notification_id)
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    await feed.publish(ChangeEvent("notifications", current_user.id, "UPDATE", notification.id))
    return notification


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: int,
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> None:
    if not await NotificationRepository(db).delete_owned(current_user.id, notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    await feed.publish(ChangeEvent("notifications", current_user.id, "DELETE", notification_id))
