"""Dashboard figures assembled from every feature."""

from datetime import date
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from components.checklist.repository import ChecklistRepository
from components.core.cache import ChangeFeed, QueryCache
from components.core.progress import completion_percent, round_half_up
from components.dashboard import schemas
from components.discussions.repository import DiscussionRepository
from components.financial.forms import BudgetForm
from components.modules.repository import ModuleRepository
from components.notifications.repository import NotificationRepository
from components.user.models import User


def readiness_status(percent: int) -> str:
    if percent <= 0:
        return "not_started"
    if percent < 25:
        return "beginning"
    if percent < 75:
        return "in_progress"
    if percent < 100:
        return "almost_ready"
    return "ready"


def readiness_score(checklist_percent: int, modules_percent: int, discussions_percent: int) -> schemas.Readiness:
    """Weighted readiness: checklist 50%, modules 30%, discussions 20%."""
    overall = round_half_up(checklist_percent * 0.5 + modules_percent * 0.3 + discussions_percent * 0.2)
    return schemas.Readiness(
        overall_percent=overall,
        status=readiness_status(overall),
        checklist=checklist_percent,
        modules=modules_percent,
        discussions=discussions_percent,
    )


def days_until(wedding_date: Optional[date], today: Optional[date] = None) -> Optional[int]:
    if wedding_date is None:
        return None
    return (wedding_date - (today or date.today())).days


class DashboardRepository:
    """Repository for dashboard operations."""

    def __init__(self, session: AsyncSession, cache: QueryCache, feed: ChangeFeed):
        """Initialize repository with database session."""
        self.session = session
        self.checklist = ChecklistRepository(session)
        self.modules = ModuleRepository(session)
        self.discussions = DiscussionRepository(session)
        self.notifications = NotificationRepository(session)
        self.budget = BudgetForm(session, cache, feed)

    async def get_dashboard(self, user: User) -> schemas.Dashboard:
        checklist = await self.checklist.get_summary(user.id)

        modules = await self.modules.completion_counts(user.id)
        modules_percent = completion_percent(modules["completed"], modules["total"])

        discussed = await self.discussions.discussed_count(user.id)
        prompts = await self.discussions.count_prompts()
        discussions_percent = completion_percent(discussed, prompts)

        budget_view = await self.budget.view(user.id)
        if budget_view["record"] is None:
            budget = schemas.BudgetSnapshot(has_budget=False)
        else:
            budget = schemas.BudgetSnapshot(has_budget=True, **budget_view["summary"])

        return schemas.Dashboard(
            first_name=user.first_name,
            days_until_wedding=days_until(user.wedding_date),
            checklist=schemas.Counts(completed=checklist.completed, total=checklist.total, percent=checklist.percent),
            modules=schemas.Counts(completed=modules["completed"], total=modules["total"], percent=modules_percent),
            discussions=schemas.Counts(completed=discussed, total=prompts, percent=discussions_percent),
            budget=budget,
            readiness=readiness_score(checklist.percent, modules_percent, discussions_percent),
            has_partner=user.partner_id is not None,
            unread_notifications=await self.notifications.unread_count(user.id),
        )
