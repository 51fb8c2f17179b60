"""Pydantic schemas for discussion prompts."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class Prompt(BaseModel):
    id: int
    category: str
    title: str
    description: Optional[str] = None
    questions: List[str] = []
    tips: Optional[str] = None
    sort_order: int

    class Config:
        from_attributes = True


class Notes(BaseModel):
    id: int
    prompt_id: int
    notes: Optional[str] = None
    is_discussed: bool
    discuss_with_partner: bool
    discussed_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PromptWithNotes(Prompt):
    user_notes: Optional[Notes] = None


class PromptCategory(BaseModel):
    category: str
    prompts: List[PromptWithNotes]
    discussed: int
    total: int


class Discussions(BaseModel):
    categories: List[PromptCategory]
    discussed: int
    total: int


class NotesUpdate(BaseModel):
    """Omitted fields keep their saved value."""
    notes: Optional[str] = Field(None, max_length=20000)
    is_discussed: Optional[bool] = None
    discuss_with_partner: Optional[bool] = None


class PartnerNotes(BaseModel):
    prompt_id: int
    prompt_title: str
    category: str
    notes: Optional[str] = None
    is_discussed: bool
    discussed_at: Optional[datetime] = None
