"""Pydantic schemas for notifications."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel


class Notification(BaseModel):
    id: int
    type: str
    title: str
    message: str
    data: Optional[Dict[str, Any]] = None
    read: bool
    read_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class UnreadCount(BaseModel):
    unread: int


class PreferencesIn(BaseModel):
    partner_invitation: Optional[bool] = None
    partner_accepted: Optional[bool] = None
    checklist_reminders: Optional[bool] = None
    module_updates: Optional[bool] = None


class Preferences(BaseModel):
    partner_invitation: bool = True
    partner_accepted: bool = True
    checklist_reminders: bool = True
    module_updates: bool = True

    class Config:
        from_attributes = True


class PreferencesView(BaseModel):
    record: Optional[Preferences] = None
    summary: Preferences
