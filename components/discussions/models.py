"""Discussion prompt models."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint

from components.core.database import Base, TimestampMixin


class DiscussionPrompt(TimestampMixin, Base):
    """A topic for the couple to talk through, with guiding questions."""
    __tablename__ = "discussion_prompts"

    id = Column(Integer, primary_key=True, index=True)
    category = Column(String(100), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    questions = Column(JSON, nullable=False, default=list)
    tips = Column(Text, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)


class UserDiscussionNotes(TimestampMixin, Base):
    __tablename__ = "user_discussion_notes"
    __table_args__ = (UniqueConstraint("user_id", "prompt_id", name="uq_discussion_notes_user_prompt"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    prompt_id = Column(Integer, ForeignKey("discussion_prompts.id", ondelete="CASCADE"), nullable=False)
    notes = Column(Text, nullable=True)
    is_discussed = Column(Boolean, nullable=False, default=False)
    discuss_with_partner = Column(Boolean, nullable=False, default=False)
    discussed_at = Column(DateTime, nullable=True)
