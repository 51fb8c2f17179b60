"""Repository for discussion prompts and the user's notes on them."""

from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.database import utcnow
from components.core.repository import UserScopedRepository
from components.discussions import schemas
from components.discussions.models import DiscussionPrompt, UserDiscussionNotes


class DiscussionNotesRepository(UserScopedRepository[UserDiscussionNotes]):
    model = UserDiscussionNotes

    async def by_prompt(self, user_id: int) -> Dict[int, UserDiscussionNotes]:
        return {row.prompt_id: row for row in await self.list_for_user(user_id)}


class DiscussionRepository:
    """Repository for discussion operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session
        self.notes = DiscussionNotesRepository(session)

    async def list_prompts(self) -> List[DiscussionPrompt]:
        result = await self.session.execute(
            select(DiscussionPrompt).order_by(DiscussionPrompt.sort_order, DiscussionPrompt.id)
        )
        return list(result.scalars().all())

    async def get_prompt(self, prompt_id: int) -> Optional[DiscussionPrompt]:
        result = await self.session.execute(
            select(DiscussionPrompt).where(DiscussionPrompt.id == prompt_id)
        )
        return result.scalar_one_or_none()

    async def get_discussions(self, user_id: int) -> schemas.Discussions:
        """Prompts grouped by category, in prompt order, each with the user's notes."""
        prompts = await self.list_prompts()
        notes = await self.notes.by_prompt(user_id)

        grouped: Dict[str, List[schemas.PromptWithNotes]] = {}
        for prompt in prompts:
            row = notes.get(prompt.id)
            grouped.setdefault(prompt.category, []).append(
                schemas.PromptWithNotes(
                    id=prompt.id,
                    category=prompt.category,
                    title=prompt.title,
                    description=prompt.description,
                    questions=prompt.questions or [],
                    tips=prompt.tips,
                    sort_order=prompt.sort_order,
                    user_notes=schemas.Notes.model_validate(row) if row else None,
                )
            )

        categories = [
            schemas.PromptCategory(
                category=category,
                prompts=items,
                discussed=sum(1 for p in items if p.user_notes and p.user_notes.is_discussed),
                total=len(items),
            )
            for category, items in grouped.items()
        ]
        return schemas.Discussions(
            categories=categories,
            discussed=sum(c.discussed for c in categories),
            total=len(prompts),
        )

    async def save_notes(self, user_id: int, prompt_id: int, changes: Dict) -> UserDiscussionNotes:
        """Upsert the user's notes; ``discussed_at`` follows ``is_discussed``."""
        values = dict(changes)
        if "is_discussed" in values and values["is_discussed"] is not None:
            values["discussed_at"] = utcnow() if values["is_discussed"] else None
        values = {k: v for k, v in values.items() if v is not None or k in ("notes", "discussed_at")}
        return await self.notes.upsert(user_id, values, prompt_id=prompt_id)

    async def shared_notes(self, user_id: int) -> List[schemas.PartnerNotes]:
        """Notes the user has flagged to discuss with their partner."""
        result = await self.session.execute(
            select(UserDiscussionNotes, DiscussionPrompt)
            .join(DiscussionPrompt, DiscussionPrompt.id == UserDiscussionNotes.prompt_id)
            .where(
                UserDiscussionNotes.user_id == user_id,
                UserDiscussionNotes.discuss_with_partner.is_(True),
            )
            .order_by(DiscussionPrompt.sort_order, DiscussionPrompt.id)
        )
        return [
            schemas.PartnerNotes(
                prompt_id=prompt.id,
                prompt_title=prompt.title,
                category=prompt.category,
                notes=row.notes,
                is_discussed=row.is_discussed,
                discussed_at=row.discussed_at,
            )
            for row, prompt in result.all()
        ]

    async def discussed_count(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(UserDiscussionNotes)
            .where(UserDiscussionNotes.user_id == user_id, UserDiscussionNotes.is_discussed.is_(True))
        )
        return result.scalar_one()

    async def count_prompts(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(DiscussionPrompt))
        return result.scalar_one()
