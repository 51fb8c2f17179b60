"""Pydantic schemas for admin management."""

from typing import Dict, List, Optional

from pydantic import BaseModel


class UploadError(BaseModel):
    """Schema for checklist upload error."""
    row: int
    message: str


class UploadResponse(BaseModel):
    """Schema for checklist upload response."""
    success: bool
    message: str
    errors: Optional[List[UploadError]] = None


class Stats(BaseModel):
    users: int
    checklist_items: int
    modules: int
    published_modules: int
    discussion_prompts: int
    resources: int
    rows: Dict[str, int]
