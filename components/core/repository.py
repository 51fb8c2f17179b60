"""Base repository for rows owned by a single user."""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete, inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

ModelT = TypeVar("ModelT")


def row_to_dict(row: Any) -> Dict[str, Any]:
    """Column values of an ORM row as a plain dict."""
    return {column.key: getattr(row, column.key) for column in inspect(row).mapper.column_attrs}


class UserScopedRepository(Generic[ModelT]):
    """
    Repository whose every query is filtered by the owning user.

    Subclasses set ``model``; the model must have a ``user_id`` column.
    """

    model: Type[ModelT]

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    def _owned(self, user_id: int):
        return select(self.model).where(self.model.user_id == user_id)

    async def get_for_user(self, user_id: int) -> Optional[ModelT]:
        """Get the user's single row (one-row-per-user tables)."""
        result = await self.session.execute(self._owned(user_id))
        return result.scalar_one_or_none()

    async def get_owned(self, user_id: int, row_id: int) -> Optional[ModelT]:
        """Get a row by id, only if it belongs to the user."""
        result = await self.session.execute(
            self._owned(user_id).where(self.model.id == row_id)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> List[ModelT]:
        result = await self.session.execute(self._owned(user_id).order_by(self.model.id))
        return list(result.scalars().all())

    async def upsert(self, user_id: int, values: Dict[str, Any], **keys: Any) -> ModelT:
        """
        Insert or update the row identified by ``user_id`` plus ``keys``.

        A concurrent insert of the same key is resolved by retrying as an update
        (last write wins).
        """
        query = self._owned(user_id)
        for column, value in keys.items():
            query = query.where(getattr(self.model, column) == value)

        row = (await self.session.execute(query)).scalar_one_or_none()
        if row is None:
            row = self.model(user_id=user_id, **keys, **values)
            self.session.add(row)
            try:
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                row = (await self.session.execute(query)).scalar_one()
                self._apply(row, values)
                await self.session.commit()
        else:
            self._apply(row, values)
            await self.session.commit()
        await self.session.refresh(row)
        return row

    @staticmethod
    def _apply(row: Any, values: Dict[str, Any]) -> None:
        for column, value in values.items():
            setattr(row, column, value)

    async def delete_owned(self, user_id: int, row_id: int) -> bool:
        result = await self.session.execute(
            delete(self.model).where(self.model.user_id == user_id, self.model.id == row_id)
        )
        await self.session.commit()
        return result.rowcount > 0
