"""Account-wide endpoints: data export and deletion."""

from datetime import date
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from components.account import schemas
from components.account.repository import AccountRepository
from components.core.cache import ChangeFeed, QueryCache
from components.core.init_db import get_cache, get_db, get_feed
from components.user.models import User
from restapi.endpoints.auth import get_current_user

router = APIRouter(prefix="/account", tags=["account"])


@router.get("/export")
async def export_account(
    db: AsyncSession = Depends(get_db),
    cache: QueryCache = Depends(get_cache),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> JSONResponse:
    """Download every row the current user owns as JSON."""
    data = await AccountRepository(db, cache, feed).export(current_user)
    filename = f"nikahprep-export-{date.today().isoformat()}.json"
    return JSONResponse(
        content=jsonable_encoder(data),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.delete("", response_model=schemas.AccountDeleted)
async def delete_account(
    db: AsyncSession = Depends(get_db),
    cache: QueryCache = Depends(get_cache),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Permanently delete the current user's account.

    All owned data is removed and a connected partner is disconnected and
    notified.
    """
    await AccountRepository(db, cache, feed).delete(current_user)
    return schemas.AccountDeleted(message="Account deleted")
