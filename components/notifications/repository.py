"""Repository for notifications and notification preferences."""

from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy import func, select, update

from components.core.cache import ChangeEvent, ChangeFeed
from components.core.database import utcnow
from components.core.forms import SingleRowForm
from components.core.repository import UserScopedRepository
from components.notifications.models import Notification, NotificationPreferences

logger = structlog.get_logger(__name__)

# notification type -> preference column that controls it
PREFERENCE_FOR_TYPE = {
    "partner_invitation": "partner_invitation",
    "partner_accepted": "partner_accepted",
    "partner_declined": "partner_accepted",
    "partner_disconnected": "partner_accepted",
    "checklist_reminder": "checklist_reminders",
    "module_update": "module_updates",
}

PREFERENCE_FIELDS = ("partner_invitation", "partner_accepted", "checklist_reminders", "module_updates")


class PreferencesRepository(UserScopedRepository[NotificationPreferences]):
    model = NotificationPreferences

    async def allows(self, user_id: int, notification_type: str) -> bool:
        column = PREFERENCE_FOR_TYPE.get(notification_type)
        if column is None:
            return True
        prefs = await self.get_for_user(user_id)
        # no row yet means everything is on
        return prefs is None or bool(getattr(prefs, column))


class PreferencesForm(SingleRowForm[PreferencesRepository]):
    repository_class = PreferencesRepository
    table = "notification_preferences"

    def validate(self, values):
        return {
            field: "Must be true or false"
            for field in PREFERENCE_FIELDS
            if not isinstance(values.get(field), bool)
        }

    def summarize(self, record):
        return {field: bool(record.get(field, True)) for field in PREFERENCE_FIELDS}


class NotificationRepository(UserScopedRepository[Notification]):
    model = Notification

    def __init__(self, session, feed: Optional[ChangeFeed] = None):
        super().__init__(session)
        self.feed = feed
        self.preferences = PreferencesRepository(session)

    async def notify(
        self,
        user_id: int,
        notification_type: str,
        title: str,
        message: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Optional[Notification]:
        """Create a notification unless the user switched this kind off."""
        if not await self.preferences.allows(user_id, notification_type):
            logger.info("notification_suppressed", user_id=user_id, type=notification_type)
            return None
        notification = Notification(
            user_id=user_id, type=notification_type, title=title, message=message, data=data
        )
        self.session.add(notification)
        await self.session.commit()
        await self.session.refresh(notification)
        if self.feed is not None:
            await self.feed.publish(ChangeEvent("notifications", user_id, "INSERT", notification.id))
        return notification

    async def list_recent(self, user_id: int, unread_only: bool = False, limit: int = 50) -> List[Notification]:
        query = self._owned(user_id)
        if unread_only:
            query = query.where(Notification.read.is_(False))
        query = query.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def unread_count(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == user_id, Notification.read.is_(False))
        )
        return result.scalar_one()

    async def mark_read(self, user_id: int, notification_id: int) -> Optional[Notification]:
        notification = await self.get_owned(user_id, notification_id)
        if notification is None:
            return None
        if not notification.read:
            notification.read = True
            notification.read_at = utcnow()
            await self.session.commit()
            await self.session.refresh(notification)
        return notification

    async def mark_all_read(self, user_id: int) -> int:
        result = await self.session.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.read.is_(False))
            .values(read=True, read_at=utcnow())
        )
        await self.session.commit()
        return result.rowcount
