"""Pydantic schemas for partner connections."""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, model_validator


class InvitationCreate(BaseModel):
    """Without an email the invitation is a shareable code."""
    invitee_email: Optional[str] = None


class InvitationAccept(BaseModel):
    invitation_code: Optional[str] = None
    invitation_id: Optional[int] = None

    @model_validator(mode="after")
    def check_reference(self):
        if not self.invitation_code and self.invitation_id is None:
            raise ValueError("invitation_code or invitation_id is required")
        return self


class Invitation(BaseModel):
    id: int
    inviter_id: int
    invitee_email: Optional[str] = None
    invitation_code: str
    invitation_type: Literal["email", "code"]
    status: Literal["pending", "accepted", "declined", "expired"]
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class Invitations(BaseModel):
    sent: List[Invitation]
    received: List[Invitation]


class Partner(BaseModel):
    """What a user may see of their partner's profile."""
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    wedding_date: Optional[date] = None
    relationship_status: str
    connected_at: Optional[datetime] = None
