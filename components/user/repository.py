"""Repository for user operations."""

from datetime import date
from typing import Any, Dict, Optional
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from components.user.models import User
from components.user.schemas import UserCreate
from components.core.security import get_password_hash


class UserRepository:
    """Repository for user operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def create(self, user: UserCreate, role: str = "user") -> User:
        """Create a new user."""
        first_name = user.first_name.strip() if user.first_name else None
        last_name = user.last_name.strip() if user.last_name else None
        db_user = User(
            email=normalize_email(user.email),
            password=get_password_hash(user.password),
            registration_date=date.today(),
            first_name=first_name,
            last_name=last_name,
            full_name=join_name(first_name, last_name),
            role=role,
            theme_mode="system",
        )
        self.session.add(db_user)
        await self.session.commit()
        await self.session.refresh(db_user)
        return db_user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        result = await self.session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        result = await self.session.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def exists(self, email: str) -> bool:
        """Check if user with given email exists."""
        result = await self.session.execute(
            select(User.id).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none() is not None

    async def update_profile(self, db_user: User, changes: Dict[str, Any]) -> User:
        """Apply profile changes and keep full_name in step with the name parts."""
        for field, value in changes.items():
            if field in ("first_name", "last_name") and value is not None:
                value = value.strip()
            setattr(db_user, field, value)
        if "first_name" in changes or "last_name" in changes:
            db_user.full_name = join_name(db_user.first_name, db_user.last_name)
        await self.session.commit()
        await self.session.refresh(db_user)
        return db_user

    async def set_password(self, db_user: User, new_password: str) -> User:
        db_user.password = get_password_hash(new_password)
        await self.session.commit()
        await self.session.refresh(db_user)
        return db_user

    async def delete(self, user_id: int) -> bool:
        """Delete user by ID; owned rows go with it through ON DELETE CASCADE."""
        await self.session.execute(
            update(User).where(User.partner_id == user_id).values(partner_id=None)
        )
        result = await self.session.execute(delete(User).where(User.id == user_id))
        await self.session.commit()
        return result.rowcount > 0

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(User))
        return result.scalar_one()


def normalize_email(email: str) -> str:
    return email.strip().lower()


def join_name(first_name: Optional[str], last_name: Optional[str]) -> Optional[str]:
    parts = [part for part in (first_name, last_name) if part]
    return " ".join(parts) or None
