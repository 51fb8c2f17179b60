"""Repository for resources and favorites."""

from typing import Any, Dict, List, Optional, Set

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.repository import UserScopedRepository
from components.resources.models import Resource, UserResourceFavorite


class FavoriteRepository(UserScopedRepository[UserResourceFavorite]):
    model = UserResourceFavorite

    async def resource_ids(self, user_id: int) -> Set[int]:
        result = await self.session.execute(
            select(UserResourceFavorite.resource_id).where(UserResourceFavorite.user_id == user_id)
        )
        return set(result.scalars().all())

    async def add(self, user_id: int, resource_id: int) -> None:
        """Mark as favorite; adding twice is a no-op."""
        if resource_id in await self.resource_ids(user_id):
            return
        self.session.add(UserResourceFavorite(user_id=user_id, resource_id=resource_id))
        try:
            await self.session.commit()
        except IntegrityError:
            # a concurrent request already created it
            await self.session.rollback()

    async def remove(self, user_id: int, resource_id: int) -> None:
        """Unmark as favorite; removing a missing favorite is a no-op."""
        result = await self.session.execute(
            self._owned(user_id).where(UserResourceFavorite.resource_id == resource_id)
        )
        row = result.scalar_one_or_none()
        if row is not None:
            await self.session.delete(row)
            await self.session.commit()


class ResourceRepository:
    """Repository for resource operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session
        self.favorites = FavoriteRepository(session)

    async def search(
        self,
        category: Optional[str] = None,
        resource_type: Optional[str] = None,
        search: Optional[str] = None,
        featured: Optional[bool] = None,
    ) -> List[Resource]:
        """Filter resources; ``search`` matches title, description or author, case-insensitively."""
        query = select(Resource)
        if category:
            query = query.where(Resource.category == category)
        if resource_type:
            query = query.where(Resource.type == resource_type)
        if featured is not None:
            query = query.where(Resource.is_featured.is_(featured))
        if search:
            term = search.strip().lower()
            for char in ("\\", "%", "_"):
                term = term.replace(char, "\\" + char)
            pattern = f"%{term}%"
            query = query.where(
                or_(
                    func.lower(Resource.title).like(pattern, escape="\\"),
                    func.lower(Resource.description).like(pattern, escape="\\"),
                    func.lower(Resource.author).like(pattern, escape="\\"),
                )
            )
        query = query.order_by(Resource.is_featured.desc(), Resource.title)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get(self, resource_id: int) -> Optional[Resource]:
        result = await self.session.execute(select(Resource).where(Resource.id == resource_id))
        return result.scalar_one_or_none()

    async def list_favorites(self, user_id: int) -> List[Resource]:
        result = await self.session.execute(
            select(Resource)
            .join(UserResourceFavorite, UserResourceFavorite.resource_id == Resource.id)
            .where(UserResourceFavorite.user_id == user_id)
            .order_by(UserResourceFavorite.created_at.desc(), Resource.id)
        )
        return list(result.scalars().all())

    async def create(self, values: Dict[str, Any]) -> Resource:
        resource = Resource(**values)
        self.session.add(resource)
        await self.session.commit()
        await self.session.refresh(resource)
        return resource

    async def update(self, resource: Resource, changes: Dict[str, Any]) -> Resource:
        for field, value in changes.items():
            setattr(resource, field, value)
        await self.session.commit()
        await self.session.refresh(resource)
        return resource

    async def delete(self, resource: Resource) -> None:
        await self.session.delete(resource)
        await self.session.commit()

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Resource))
        return result.scalar_one()
