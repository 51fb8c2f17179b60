"""Repository for checklist operations."""

from typing import Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from components.checklist import schemas
from components.checklist.models import ChecklistCategory, ChecklistItem, UserChecklistProgress
from components.core.database import utcnow
from components.core.progress import completion_percent
from components.core.repository import UserScopedRepository


def checklist_status(percent: int) -> str:
    if percent <= 0:
        return "not_started"
    if percent < 75:
        return "in_progress"
    if percent < 100:
        return "almost_done"
    return "complete"


class ProgressRepository(UserScopedRepository[UserChecklistProgress]):
    model = UserChecklistProgress

    async def by_item(self, user_id: int) -> Dict[int, UserChecklistProgress]:
        return {row.item_id: row for row in await self.list_for_user(user_id)}

    async def set_progress(
        self, user_id: int, item_id: int, is_completed: Optional[bool], notes: Optional[str]
    ) -> UserChecklistProgress:
        """Upsert progress; ``completed_at`` follows ``is_completed``."""
        values = {}
        if is_completed is not None:
            values["is_completed"] = is_completed
            values["completed_at"] = utcnow() if is_completed else None
        if notes is not None:
            values["notes"] = notes
        return await self.upsert(user_id, values, item_id=item_id)


class ChecklistRepository:
    """Repository for checklist operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session
        self.progress = ProgressRepository(session)

    def _visible_to(self, user_id: int):
        return or_(ChecklistItem.created_by.is_(None), ChecklistItem.created_by == user_id)

    async def get_category(self, category_id: int) -> Optional[ChecklistCategory]:
        result = await self.session.execute(
            select(ChecklistCategory).where(ChecklistCategory.id == category_id)
        )
        return result.scalar_one_or_none()

    async def get_category_by_slug(self, slug: str) -> Optional[ChecklistCategory]:
        result = await self.session.execute(
            select(ChecklistCategory).where(ChecklistCategory.slug == slug)
        )
        return result.scalar_one_or_none()

    async def list_categories(self) -> List[ChecklistCategory]:
        result = await self.session.execute(
            select(ChecklistCategory).order_by(ChecklistCategory.sort_order, ChecklistCategory.id)
        )
        return list(result.scalars().all())

    async def visible_items(self, user_id: int) -> List[ChecklistItem]:
        """Global items plus the user's own custom items."""
        result = await self.session.execute(
            select(ChecklistItem)
            .where(self._visible_to(user_id))
            .order_by(ChecklistItem.category_id, ChecklistItem.sort_order, ChecklistItem.id)
        )
        return list(result.scalars().all())

    async def get_visible_item(self, user_id: int, item_id: int) -> Optional[ChecklistItem]:
        result = await self.session.execute(
            select(ChecklistItem).where(ChecklistItem.id == item_id, self._visible_to(user_id))
        )
        return result.scalar_one_or_none()

    async def get_checklist(self, user_id: int) -> schemas.Checklist:
        """
        Build the user's checklist.

        Returns every category with its visible items merged with the user's
        progress, plus per-category and overall completion counts.
        """
        categories = await self.list_categories()
        items = await self.visible_items(user_id)
        progress = await self.progress.by_item(user_id)

        items_by_category: Dict[int, List[schemas.ChecklistItem]] = {c.id: [] for c in categories}
        for item in items:
            row = progress.get(item.id)
            items_by_category.setdefault(item.category_id, []).append(
                schemas.ChecklistItem(
                    id=item.id,
                    category_id=item.category_id,
                    title=item.title,
                    description=item.description,
                    is_required=item.is_required,
                    sort_order=item.sort_order,
                    is_custom=item.is_custom,
                    is_completed=bool(row and row.is_completed),
                    completed_at=row.completed_at if row else None,
                    notes=row.notes if row else None,
                )
            )

        result = []
        for category in categories:
            category_items = items_by_category[category.id]
            result.append(
                schemas.ChecklistCategory(
                    id=category.id,
                    slug=category.slug,
                    name=category.name,
                    description=category.description,
                    icon=category.icon,
                    sort_order=category.sort_order,
                    completed=sum(1 for i in category_items if i.is_completed),
                    total=len(category_items),
                    items=category_items,
                )
            )

        completed = sum(c.completed for c in result)
        total = sum(c.total for c in result)
        return schemas.Checklist(categories=result, summary=self.summary(completed, total))

    @staticmethod
    def summary(completed: int, total: int) -> schemas.ChecklistSummary:
        percent = completion_percent(completed, total)
        return schemas.ChecklistSummary(
            completed=completed, total=total, percent=percent, status=checklist_status(percent)
        )

    async def get_summary(self, user_id: int) -> schemas.ChecklistSummary:
        items = await self.visible_items(user_id)
        visible = {item.id for item in items}
        progress = await self.progress.by_item(user_id)
        completed = sum(1 for item_id, row in progress.items() if row.is_completed and item_id in visible)
        return self.summary(completed, len(items))

    async def create_item(
        self,
        category_id: int,
        title: str,
        description: Optional[str] = None,
        is_required: bool = False,
        sort_order: Optional[int] = None,
        created_by: Optional[int] = None,
    ) -> ChecklistItem:
        """Create an item; custom items go after the category's existing items."""
        if sort_order is None:
            result = await self.session.execute(
                select(func.max(ChecklistItem.sort_order)).where(ChecklistItem.category_id == category_id)
            )
            sort_order = (result.scalar() or 0) + 1
        item = ChecklistItem(
            category_id=category_id,
            title=title.strip(),
            description=description,
            is_required=is_required,
            sort_order=sort_order,
            created_by=created_by,
        )
        self.session.add(item)
        await self.session.commit()
        await self.session.refresh(item)
        return item

    async def delete_custom_item(self, user_id: int, item_id: int) -> bool:
        """Delete one of the user's own custom items; global items are never deleted here."""
        result = await self.session.execute(
            select(ChecklistItem).where(ChecklistItem.id == item_id, ChecklistItem.created_by == user_id)
        )
        item = result.scalar_one_or_none()
        if item is None:
            return False
        await self.session.delete(item)
        await self.session.commit()
        return True

    async def count_items(self) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(ChecklistItem).where(ChecklistItem.created_by.is_(None))
        )
        return result.scalar_one()
