"""Repository for learning modules, lesson progress, quizzes and notes."""

from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from components.core.database import utcnow
from components.core.progress import completion_percent
from components.core.repository import UserScopedRepository
from components.modules import schemas
from components.modules.models import Lesson, Module, UserModuleNotes, UserModuleProgress, UserModuleQuiz

PASSING_SCORE = 70


def quiz_grade(score: Optional[int]) -> Optional[str]:
    if score is None:
        return None
    if score >= 90:
        return "A"
    if score >= 80:
        return "B"
    if score >= PASSING_SCORE:
        return "C"
    return "Incomplete"


def module_completion(completed_lessons: int, total_lessons: int, quiz_score: Optional[int]) -> Dict:
    """A module is complete when every lesson is done and the quiz, if taken, was passed."""
    if total_lessons == 0:
        return {"percent": 0, "is_complete": False, "grade": quiz_grade(quiz_score)}
    is_complete = completed_lessons == total_lessons and (quiz_score is None or quiz_score >= PASSING_SCORE)
    return {
        "percent": completion_percent(completed_lessons, total_lessons),
        "is_complete": is_complete,
        "grade": quiz_grade(quiz_score),
    }


class LessonProgressRepository(UserScopedRepository[UserModuleProgress]):
    model = UserModuleProgress


class QuizRepository(UserScopedRepository[UserModuleQuiz]):
    model = UserModuleQuiz


class NotesRepository(UserScopedRepository[UserModuleNotes]):
    model = UserModuleNotes


class ModuleRepository:
    """Repository for module operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session
        self.lesson_progress = LessonProgressRepository(session)
        self.quizzes = QuizRepository(session)
        self.notes = NotesRepository(session)

    async def _lesson_counts(self) -> Dict[int, int]:
        result = await self.session.execute(
            select(Lesson.module_id, func.count(Lesson.id)).group_by(Lesson.module_id)
        )
        return {module_id: count for module_id, count in result.all()}

    async def list_modules(self, include_unpublished: bool = False) -> List[schemas.ModuleSummary]:
        query = select(Module).order_by(Module.sort_order, Module.id)
        if not include_unpublished:
            query = query.where(Module.is_published.is_(True))
        modules = (await self.session.execute(query)).scalars().all()
        counts = await self._lesson_counts()
        return [
            schemas.ModuleSummary(
                id=module.id,
                slug=module.slug,
                title=module.title,
                description=module.description,
                icon=module.icon,
                estimated_duration=module.estimated_duration,
                sort_order=module.sort_order,
                is_published=module.is_published,
                lesson_count=counts.get(module.id, 0),
            )
            for module in modules
        ]

    async def get_by_slug(self, slug: str, include_unpublished: bool = False) -> Optional[Module]:
        query = select(Module).options(selectinload(Module.lessons)).where(Module.slug == slug)
        if not include_unpublished:
            query = query.where(Module.is_published.is_(True))
        return (await self.session.execute(query)).scalar_one_or_none()

    @staticmethod
    def detail(module: Module) -> schemas.ModuleDetail:
        return schemas.ModuleDetail(
            id=module.id,
            slug=module.slug,
            title=module.title,
            description=module.description,
            icon=module.icon,
            estimated_duration=module.estimated_duration,
            sort_order=module.sort_order,
            is_published=module.is_published,
            lesson_count=len(module.lessons),
            lessons=[schemas.Lesson.model_validate(lesson) for lesson in module.lessons],
        )

    async def get_lesson(self, module_id: int, lesson_id: int) -> Optional[Lesson]:
        result = await self.session.execute(
            select(Lesson).where(Lesson.id == lesson_id, Lesson.module_id == module_id)
        )
        return result.scalar_one_or_none()

    async def get_progress(self, user_id: int, module: Module) -> schemas.ModuleProgress:
        lesson_ids = {lesson.id for lesson in module.lessons}
        result = await self.session.execute(
            select(UserModuleProgress.lesson_id).where(
                UserModuleProgress.user_id == user_id,
                UserModuleProgress.module_id == module.id,
                UserModuleProgress.is_completed.is_(True),
            )
        )
        completed_ids = sorted(lesson_id for lesson_id in result.scalars().all() if lesson_id in lesson_ids)
        quiz = (
            await self.session.execute(
                self.quizzes._owned(user_id).where(UserModuleQuiz.module_id == module.id)
            )
        ).scalar_one_or_none()
        quiz_score = quiz.quiz_score if quiz else None
        completion = module_completion(len(completed_ids), len(lesson_ids), quiz_score)
        return schemas.ModuleProgress(
            module_id=module.id,
            slug=module.slug,
            completed_lessons=len(completed_ids),
            total_lessons=len(lesson_ids),
            completed_lesson_ids=completed_ids,
            quiz_score=quiz_score,
            **completion,
        )

    async def set_lesson_progress(self, user_id: int, lesson: Lesson, is_completed: bool) -> UserModuleProgress:
        return await self.lesson_progress.upsert(
            user_id,
            {
                "module_id": lesson.module_id,
                "is_completed": is_completed,
                "completed_at": utcnow() if is_completed else None,
            },
            lesson_id=lesson.id,
        )

    async def set_quiz_score(self, user_id: int, module_id: int, score: int) -> UserModuleQuiz:
        return await self.quizzes.upsert(user_id, {"quiz_score": score}, module_id=module_id)

    async def get_notes(self, user_id: int, module_id: int) -> Optional[UserModuleNotes]:
        result = await self.session.execute(
            self.notes._owned(user_id).where(UserModuleNotes.module_id == module_id)
        )
        return result.scalar_one_or_none()

    async def save_notes(self, user_id: int, module_id: int, content: str) -> UserModuleNotes:
        """Upsert keyed by (user, module); the last write wins."""
        return await self.notes.upsert(user_id, {"content": content}, module_id=module_id)

    async def set_published(self, module: Module, is_published: bool) -> Module:
        module.is_published = is_published
        await self.session.commit()
        return module

    async def completion_counts(self, user_id: int) -> Dict[str, int]:
        """How many published modules the user has completed, out of how many."""
        result = await self.session.execute(
            select(Module)
            .options(selectinload(Module.lessons))
            .where(Module.is_published.is_(True))
        )
        modules = result.scalars().all()
        completed = 0
        for module in modules:
            progress = await self.get_progress(user_id, module)
            if progress.is_complete:
                completed += 1
        return {"completed": completed, "total": len(modules)}
