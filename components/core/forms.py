"""
Data-bound single-row forms.

Every tracker page follows the same flow: load the user's row, validate the
submitted fields, upsert, then reconcile the cache. That flow lives here once;
features only declare their repository, validation and summary.
"""

from decimal import Decimal
from typing import Any, Dict, Generic, Optional, Type, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.cache import ChangeEvent, ChangeFeed, QueryCache
from components.core.errors import FormValidationError
from components.core.repository import UserScopedRepository, row_to_dict

logger = structlog.get_logger(__name__)

RepoT = TypeVar("RepoT", bound=UserScopedRepository)

# Columns a client never writes through a form
READ_ONLY_FIELDS = {"id", "user_id", "created_at", "updated_at"}


class SingleRowForm(Generic[RepoT]):
    """Generic fetch -> validate -> upsert -> invalidate flow for one-row-per-user tables."""

    repository_class: Type[RepoT]
    table: str

    def __init__(self, session: AsyncSession, cache: QueryCache, feed: ChangeFeed):
        self.repository = self.repository_class(session)
        self.cache = cache
        self.feed = feed

    def cache_key(self, user_id: int):
        return (self.table, user_id)

    def defaults(self) -> Dict[str, Any]:
        """Column defaults used to fill a record that has never been saved."""
        values = {}
        for column in self.repository.model.__table__.columns:
            if column.key in READ_ONLY_FIELDS:
                continue
            default = column.default.arg if column.default is not None else None
            values[column.key] = default
        return values

    def validate(self, values: Dict[str, Any]) -> Dict[str, str]:
        """Return ``{field: message}`` for every invalid field."""
        return {}

    def prepare(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Derive computed columns before the write."""
        return values

    def summarize(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Derived figures shown next to the form."""
        return {}

    async def load(self, user_id: int) -> Optional[Dict[str, Any]]:
        async def fetch():
            row = await self.repository.get_for_user(user_id)
            return row_to_dict(row) if row is not None else None

        return await self.cache.get_or_load(self.cache_key(user_id), fetch)

    async def view(self, user_id: int) -> Dict[str, Any]:
        record = await self.load(user_id)
        return {
            "record": record,
            "summary": self.summarize(record if record is not None else self.defaults()),
        }

    async def save(self, user_id: int, submitted: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and persist ``submitted`` over the current values.

        Raises FormValidationError with every failing field; nothing is
        written in that case.
        """
        current = await self.load(user_id) or self.defaults()
        values = {k: v for k, v in submitted.items() if k not in READ_ONLY_FIELDS}
        merged = {**{k: v for k, v in current.items() if k not in READ_ONLY_FIELDS}, **values}

        errors = self.validate(merged)
        if errors:
            logger.info("form_rejected", table=self.table, user_id=user_id, fields=sorted(errors))
            raise FormValidationError(errors)

        merged = self.prepare(merged)

        async def persist():
            row = await self.repository.upsert(user_id, merged)
            await self.feed.publish(ChangeEvent(self.table, user_id, "UPSERT", row.id))
            return row_to_dict(row)

        optimistic = {**current, **merged}
        record = await self.cache.optimistic_update(self.cache_key(user_id), optimistic, persist)
        logger.info("form_saved", table=self.table, user_id=user_id, row_id=record["id"])
        return {"record": record, "summary": self.summarize(record)}


def as_decimal(value: Any) -> Decimal:
    """Coerce a stored or submitted amount to Decimal (None counts as zero)."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
