"""Partner connection models."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from components.core.database import Base, TimestampMixin


class Couple(TimestampMixin, Base):
    """An active connection between two users; user1 is the inviter."""
    __tablename__ = "couples"
    __table_args__ = (
        UniqueConstraint("user1_id", "user2_id", name="uq_couples_pair"),
        CheckConstraint("user1_id != user2_id", name="ck_couples_different_users"),
        CheckConstraint(
            "relationship_status IN ('engaged', 'married', 'preparing')", name="ck_couples_relationship_status"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user1_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user2_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    relationship_status = Column(String(20), nullable=False, default="preparing")
    connected_at = Column(DateTime, nullable=True)

    def partner_of(self, user_id: int) -> int:
        return self.user2_id if self.user1_id == user_id else self.user1_id


class PartnerInvitation(TimestampMixin, Base):
    __tablename__ = "partner_invitations"
    __table_args__ = (
        CheckConstraint("status IN ('pending', 'accepted', 'declined', 'expired')", name="ck_invitations_status"),
        CheckConstraint("invitation_type IN ('email', 'code')", name="ck_invitations_type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    inviter_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    invitee_email = Column(String(255), nullable=True, index=True)
    invitation_code = Column(String(20), unique=True, nullable=False, index=True)
    invitation_type = Column(String(10), nullable=False)
    status = Column(String(10), nullable=False, default="pending")
    expires_at = Column(DateTime, nullable=False)
    accepted_at = Column(DateTime, nullable=True)
