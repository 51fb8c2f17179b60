"""Export and deletion of everything a user owns."""

from datetime import datetime, timezone
from typing import Any, Dict, List

import structlog
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from components.checklist.models import ChecklistItem, UserChecklistProgress
from components.core.cache import ChangeEvent, ChangeFeed, QueryCache
from components.core.repository import row_to_dict
from components.discussions.models import UserDiscussionNotes
from components.financial.models import Budget, Mahr, SavingsGoals, WeddingBudget
from components.modules.models import UserModuleNotes, UserModuleProgress, UserModuleQuiz
from components.notifications.models import Notification, NotificationPreferences
from components.partner.models import Couple, PartnerInvitation
from components.partner.repository import PartnerRepository
from components.resources.models import UserResourceFavorite
from components.user.models import User
from components.user.repository import UserRepository

logger = structlog.get_logger(__name__)

# export key -> model owned through user_id
OWNED_TABLES = {
    "budget": Budget,
    "mahr": Mahr,
    "wedding_budget": WeddingBudget,
    "savings_goals": SavingsGoals,
    "checklist_progress": UserChecklistProgress,
    "module_progress": UserModuleProgress,
    "module_quizzes": UserModuleQuiz,
    "module_notes": UserModuleNotes,
    "discussion_notes": UserDiscussionNotes,
    "resource_favorites": UserResourceFavorite,
    "notifications": Notification,
    "notification_preferences": NotificationPreferences,
}

PROFILE_FIELDS = (
    "id", "email", "first_name", "last_name", "full_name", "date_of_birth", "gender",
    "marital_status", "country", "city", "wedding_date", "theme_mode", "role", "registration_date",
)


class AccountRepository:
    """Repository for account-wide operations."""

    def __init__(self, session: AsyncSession, cache: QueryCache, feed: ChangeFeed):
        """Initialize repository with database session."""
        self.session = session
        self.cache = cache
        self.feed = feed

    async def _rows(self, query) -> List[Dict[str, Any]]:
        result = await self.session.execute(query)
        return [row_to_dict(row) for row in result.scalars().all()]

    async def export(self, user: User) -> Dict[str, Any]:
        """
        Collect every row the user owns as plain data.

        The partner's identity is left out of the couple and invitation entries.
        """
        data: Dict[str, Any] = {
            "export_date": datetime.now(timezone.utc),
            "user_id": user.id,
            "profile": {field: getattr(user, field) for field in PROFILE_FIELDS},
        }
        for key, model in OWNED_TABLES.items():
            data[key] = await self._rows(select(model).where(model.user_id == user.id).order_by(model.id))

        data["custom_checklist_items"] = await self._rows(
            select(ChecklistItem).where(ChecklistItem.created_by == user.id).order_by(ChecklistItem.id)
        )
        invitation_fields = ("id", "invitation_type", "status", "created_at", "expires_at", "accepted_at")
        sent = await self._rows(select(PartnerInvitation).where(PartnerInvitation.inviter_id == user.id))
        data["partner_invitations"] = [{k: row[k] for k in invitation_fields} for row in sent]
        received = await self._rows(select(PartnerInvitation).where(PartnerInvitation.invitee_email == user.email))
        data["received_invitations"] = [{k: row[k] for k in invitation_fields} for row in received]
        couples = await self._rows(
            select(Couple).where(or_(Couple.user1_id == user.id, Couple.user2_id == user.id))
        )
        data["couples"] = [
            {k: row[k] for k in ("id", "relationship_status", "connected_at", "created_at")} for row in couples
        ]
        logger.info("account_exported", user_id=user.id)
        return data

    async def delete(self, user: User) -> None:
        """
        Delete the user and everything they own.

        The partner, if any, is disconnected and notified first; owned rows go
        through ON DELETE CASCADE and the user's cache entries are dropped.
        """
        user_id = user.id
        await PartnerRepository(self.session, self.feed).disconnect(user)
        await UserRepository(self.session).delete(user_id)
        self.cache.invalidate_user(user_id)
        await self.feed.publish(ChangeEvent("users", user_id, "DELETE", user_id))
        logger.info("account_deleted", user_id=user_id)
