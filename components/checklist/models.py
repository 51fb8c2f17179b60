"""Marriage readiness checklist models."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from components.core.database import Base, TimestampMixin


class ChecklistCategory(TimestampMixin, Base):
    __tablename__ = "checklist_categories"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String(50), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)

    items = relationship(
        "ChecklistItem",
        back_populates="category",
        order_by="ChecklistItem.sort_order",
        cascade="all, delete-orphan",
    )


class ChecklistItem(TimestampMixin, Base):
    """
    A checklist entry.

    Items with ``created_by`` NULL are global; otherwise the item is a custom
    item visible only to the user who created it.
    """
    __tablename__ = "checklist_items"

    id = Column(Integer, primary_key=True, index=True)
    category_id = Column(Integer, ForeignKey("checklist_categories.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_required = Column(Boolean, nullable=False, default=False)
    sort_order = Column(Integer, nullable=False, default=0)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)

    category = relationship("ChecklistCategory", back_populates="items")

    @property
    def is_custom(self) -> bool:
        return self.created_by is not None


class UserChecklistProgress(TimestampMixin, Base):
    """Per-user completion state of a checklist item."""
    __tablename__ = "user_checklist_progress"
    __table_args__ = (UniqueConstraint("user_id", "item_id", name="uq_checklist_progress_user_item"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("checklist_items.id", ondelete="CASCADE"), nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
