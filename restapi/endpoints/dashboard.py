"""Dashboard endpoint for the API."""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.cache import ChangeFeed, QueryCache
from components.core.init_db import get_cache, get_db, get_feed
from components.dashboard import schemas
from components.dashboard.repository import DashboardRepository
from components.user.models import User
from restapi.endpoints.auth import get_current_user

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=schemas.Dashboard)
async def read_dashboard(
    db: AsyncSession = Depends(get_db),
    cache: QueryCache = Depends(get_cache),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Get the dashboard overview.

    Returns:
    - Checklist, module and discussion completion counts
    - Days until the wedding (when a wedding date is set)
    - Monthly budget snapshot
    - Readiness score: checklist 50%, modules 30%, discussions 20%
    """
    return await DashboardRepository(db, cache, feed).get_dashboard(current_user)
