"""Learning module models."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from components.core.database import Base, TimestampMixin


class Module(TimestampMixin, Base):
    """Learning module; only published modules are listed publicly."""
    __tablename__ = "modules"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(50), unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String(50), nullable=True)
    estimated_duration = Column(Integer, nullable=True)  # minutes
    sort_order = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=True)

    lessons = relationship("Lesson", back_populates="module", order_by="Lesson.sort_order")


class Lesson(TimestampMixin, Base):
    __tablename__ = "lessons"

    id = Column(Integer, primary_key=True, index=True)
    module_id = Column(Integer, ForeignKey("modules.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    video_url = Column(String(500), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)

    module = relationship("Module", back_populates="lessons")


class UserModuleProgress(TimestampMixin, Base):
    """Lesson completion, one row per user and lesson."""
    __tablename__ = "user_module_progress"
    __table_args__ = (UniqueConstraint("user_id", "lesson_id", name="uq_module_progress_user_lesson"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    module_id = Column(Integer, ForeignKey("modules.id", ondelete="CASCADE"), nullable=False)
    lesson_id = Column(Integer, ForeignKey("lessons.id", ondelete="CASCADE"), nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime, nullable=True)


class UserModuleQuiz(TimestampMixin, Base):
    __tablename__ = "user_module_quiz"
    __table_args__ = (
        UniqueConstraint("user_id", "module_id", name="uq_module_quiz_user_module"),
        CheckConstraint("quiz_score BETWEEN 0 AND 100", name="ck_module_quiz_score"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    module_id = Column(Integer, ForeignKey("modules.id", ondelete="CASCADE"), nullable=False)
    quiz_score = Column(Integer, nullable=False)


class UserModuleNotes(TimestampMixin, Base):
    """Free-text notes per user and module, written by the autosaver."""
    __tablename__ = "user_module_notes"
    __table_args__ = (UniqueConstraint("user_id", "module_id", name="uq_module_notes_user_module"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    module_id = Column(Integer, ForeignKey("modules.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False, default="")
