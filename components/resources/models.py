"""Resource library models."""

from sqlalchemy import Boolean, CheckConstraint, Column, Date, ForeignKey, Integer, String, Text, UniqueConstraint

from components.core.database import Base, TimestampMixin

RESOURCE_TYPES = ("article", "video", "pdf", "link")


class Resource(TimestampMixin, Base):
    __tablename__ = "resources"
    __table_args__ = (
        CheckConstraint("type IN ('article', 'video', 'pdf', 'link')", name="ck_resources_type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(10), nullable=False, default="article")
    category = Column(String(100), nullable=True, index=True)
    url = Column(String(500), nullable=True)
    author = Column(String(255), nullable=True)
    published_date = Column(Date, nullable=True)
    is_featured = Column(Boolean, nullable=False, default=False)


class UserResourceFavorite(TimestampMixin, Base):
    __tablename__ = "user_resource_favorites"
    __table_args__ = (UniqueConstraint("user_id", "resource_id", name="uq_resource_favorites_user_resource"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    resource_id = Column(Integer, ForeignKey("resources.id", ondelete="CASCADE"), nullable=False)
