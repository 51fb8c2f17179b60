"""Pydantic schemas for learning modules."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class Lesson(BaseModel):
    id: int
    module_id: int
    title: str
    content: Optional[str] = None
    video_url: Optional[str] = None
    sort_order: int

    class Config:
        from_attributes = True


class ModuleSummary(BaseModel):
    """Module as shown in the module list."""
    id: int
    slug: str
    title: str
    description: Optional[str] = None
    icon: Optional[str] = None
    estimated_duration: Optional[int] = None
    sort_order: int
    is_published: bool
    lesson_count: int = 0


class ModuleDetail(ModuleSummary):
    lessons: List[Lesson] = []


class ModuleProgress(BaseModel):
    module_id: int
    slug: str
    completed_lessons: int
    total_lessons: int
    completed_lesson_ids: List[int] = []
    percent: int
    quiz_score: Optional[int] = None
    is_complete: bool
    grade: Optional[Literal["A", "B", "C", "Incomplete"]] = None


class LessonProgressUpdate(BaseModel):
    is_completed: bool


class LessonProgress(BaseModel):
    id: int
    module_id: int
    lesson_id: int
    is_completed: bool
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class QuizSubmission(BaseModel):
    score: int = Field(..., ge=0, le=100)


class NotesUpdate(BaseModel):
    content: str = Field(..., max_length=20000)


class Notes(BaseModel):
    module_id: int
    content: str
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PublishUpdate(BaseModel):
    is_published: bool
