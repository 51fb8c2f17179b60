"""Learning module endpoints for the API."""

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.cache import ChangeEvent, ChangeFeed
from components.core.init_db import get_db, get_feed
from components.modules import schemas
from components.modules.models import Module
from components.modules.repository import ModuleRepository
from components.user.models import User
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/modules",
    tags=["modules"],
    responses={404: {"description": "Not found"}},
)


async def get_module(repo: ModuleRepository, slug: str) -> Module:
    module = await repo.get_by_slug(slug)
    if module is None:
        raise HTTPException(status_code=404, detail="Module not found")
    return module


@router.get("", response_model=List[schemas.ModuleSummary])
async def list_modules(db: AsyncSession = Depends(get_db)) -> Any:
    """List published modules with their lesson counts."""
    return await ModuleRepository(db).list_modules()


@router.get("/{slug}", response_model=schemas.ModuleDetail)
async def read_module(slug: str, db: AsyncSession = Depends(get_db)) -> Any:
    """Get a published module with its lessons in order."""
    repo = ModuleRepository(db)
    return repo.detail(await get_module(repo, slug))


@router.get("/{slug}/progress", response_model=schemas.ModuleProgress)
async def read_progress(
    slug: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Get the current user's progress through a module.

    A module is complete when every lesson is done and the quiz, if taken,
    scored at least 70. Grades: A from 90, B from 80, C from 70, otherwise
    Incomplete.
    """
    repo = ModuleRepository(db)
    return await repo.get_progress(current_user.id, await get_module(repo, slug))


@router.put("/{slug}/lessons/{lesson_id}", response_model=schemas.LessonProgress)
async def update_lesson_progress(
    slug: str,
    lesson_id: int,
    body: schemas.LessonProgressUpdate,
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Mark a lesson complete or incomplete."""
    repo = ModuleRepository(db)
    module = await get_module(repo, slug)
    lesson = await repo.get_lesson(module.id, lesson_id)
    if lesson is None:
        raise HTTPException(status_code=404, detail="Lesson not found")

    progress = await repo.set_lesson_progress(current_user.id, lesson, body.is_completed)
    await feed.publish(ChangeEvent("user_module_progress", current_user.id, "UPSERT", progress.id))
    return progress


@router.put("/{slug}/quiz", response_model=schemas.ModuleProgress)
async def submit_quiz(
    slug: str,
    body: schemas.QuizSubmission,
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Record a quiz score (0-100) and return the updated progress."""
    repo = ModuleRepository(db)
    module = await get_module(repo, slug)
    quiz = await repo.set_quiz_score(current_user.id, module.id, body.score)
    await feed.publish(ChangeEvent("user_module_quiz", current_user.id, "UPSERT", quiz.id))
    return await repo.get_progress(current_user.id, module)


@router.get("/{slug}/notes", response_model=schemas.Notes)
async def read_notes(
    slug: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Get the current user's notes for a module (empty when none saved)."""
    repo = ModuleRepository(db)
    module = await get_module(repo, slug)
    notes = await repo.get_notes(current_user.id, module.id)
    if notes is None:
        return schemas.Notes(module_id=module.id, content="")
    return notes


@router.put("/{slug}/notes", response_model=schemas.Notes)
async def save_notes(
    slug: str,
    body: schemas.NotesUpdate,
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Autosave target: upsert by user and module, last write wins."""
    repo = ModuleRepository(db)
    module = await get_module(repo, slug)
    notes = await repo.save_notes(current_user.id, module.id, body.content)
    await feed.publish(ChangeEvent("user_module_notes", current_user.id, "UPSERT", notes.id))
    return notes
