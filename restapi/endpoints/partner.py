"""Partner connection endpoints for the API."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.cache import ChangeFeed
from components.core.init_db import get_db, get_feed
from components.partner import schemas
from components.partner.repository import PartnerRepository
from components.user.models import User
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/partner",
    tags=["partner"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=schemas.Partner)
async def read_partner(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Get the connected partner's profile summary."""
    repo = PartnerRepository(db)
    connection = await repo.get_partner(current_user)
    if connection is None:
        raise HTTPException(status_code=404, detail="No partner connected")
    return repo.partner_view(*connection)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def disconnect_partner(
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> None:
    """Disconnect from the partner; both sides are notified."""
    if not await PartnerRepository(db, feed).disconnect(current_user):
        raise HTTPException(status_code=404, detail="No partner connected")


@router.post("/invitations", response_model=schemas.Invitation, status_code=status.HTTP_201_CREATED)
async def create_invitation(
    body: schemas.InvitationCreate,
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Invite a partner by email, or create a shareable code when no email is given.

    Only one invitation can be pending at a time; creating a new one expires
    the previous one. Invitations expire after 7 days.
    """
    return await PartnerRepository(db, feed).create_invitation(current_user, body.invitee_email)


@router.get("/invitations", response_model=schemas.Invitations)
async def list_invitations(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Invitations sent by the current user and those addressed to their email."""
    return await PartnerRepository(db).list_invitations(current_user)


@router.post("/invitations/accept", response_model=schemas.Partner)
async def accept_invitation(
    body: schemas.InvitationAccept,
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Accept an invitation by code or id and return the new partner."""
    repo = PartnerRepository(db, feed)
    await repo.accept(current_user, body.invitation_code, body.invitation_id)
    return repo.partner_view(*await repo.get_partner(current_user))


@router.post("/invitations/{invitation_id}/decline", response_model=schemas.Invitation)
async def decline_invitation(
    invitation_id: int,
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Decline an invitation addressed to the current user."""
    return await PartnerRepository(db, feed).decline(current_user, invitation_id)
