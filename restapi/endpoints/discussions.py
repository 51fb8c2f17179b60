"""Discussion prompt endpoints for the API."""

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.cache import ChangeEvent, ChangeFeed
from components.core.init_db import get_db, get_feed
from components.discussions import schemas
from components.discussions.repository import DiscussionRepository
from components.partner.repository import PartnerRepository
from components.user.models import User
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/discussions",
    tags=["discussions"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=schemas.Discussions)
async def list_discussions(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Get prompts grouped by category, each with the current user's notes."""
    return await DiscussionRepository(db).get_discussions(current_user.id)


@router.get("/partner", response_model=List[schemas.PartnerNotes])
async def partner_notes(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Get the notes the connected partner chose to share."""
    connection = await PartnerRepository(db).get_partner(current_user)
    if connection is None:
        raise HTTPException(status_code=404, detail="No partner connected")
    partner, _ = connection
    return await DiscussionRepository(db).shared_notes(partner.id)


@router.put("/{prompt_id}", response_model=schemas.Notes)
async def save_notes(
    prompt_id: int,
    changes: schemas.NotesUpdate,
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Save notes and flags for a prompt; ``discussed_at`` follows ``is_discussed``."""
    repo = DiscussionRepository(db)
    if await repo.get_prompt(prompt_id) is None:
        raise HTTPException(status_code=404, detail="Discussion prompt not found")

    notes = await repo.save_notes(current_user.id, prompt_id, changes.model_dump(exclude_unset=True))
    await feed.publish(ChangeEvent("user_discussion_notes", current_user.id, "UPSERT", notes.id))
    return notes
