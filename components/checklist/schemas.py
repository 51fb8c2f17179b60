"""Pydantic schemas for the checklist."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

ChecklistStatus = Literal["not_started", "in_progress", "almost_done", "complete"]


class ChecklistItem(BaseModel):
    """Checklist item merged with the current user's progress."""
    id: int
    category_id: int
    title: str
    description: Optional[str] = None
    is_required: bool
    sort_order: int
    is_custom: bool
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None


class ChecklistCategory(BaseModel):
    id: int
    slug: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    sort_order: int
    completed: int
    total: int
    items: List[ChecklistItem]


class ChecklistSummary(BaseModel):
    completed: int
    total: int
    percent: int
    status: ChecklistStatus


class Checklist(BaseModel):
    categories: List[ChecklistCategory]
    summary: ChecklistSummary


class ProgressUpdate(BaseModel):
    """Omitted fields keep their saved value."""
    is_completed: Optional[bool] = None
    notes: Optional[str] = Field(None, max_length=5000)


class Progress(BaseModel):
    id: int
    item_id: int
    is_completed: bool
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class CustomItemCreate(BaseModel):
    category_id: int
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    is_required: bool = False
