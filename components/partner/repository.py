"""Repository for partner invitations and couples."""

from datetime import timedelta
from typing import List, Optional, Tuple

import structlog
from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.cache import ChangeEvent, ChangeFeed
from components.core.config import get_settings
from components.core.database import utcnow
from components.core.errors import AppError, ConflictError, NotFoundError, PermissionDeniedError
from components.core.validation import validate_email
from components.notifications.repository import NotificationRepository
from components.partner import schemas
from components.partner.models import Couple, PartnerInvitation
from components.partner.utils import generate_invitation_code, normalize_invitation_code
from components.user.models import User
from components.user.repository import UserRepository, normalize_email

logger = structlog.get_logger(__name__)
settings = get_settings()


def display_name(user: User) -> str:
    return user.full_name or user.email


class PartnerRepository:
    """Repository for partner operations."""

    def __init__(self, session: AsyncSession, feed: Optional[ChangeFeed] = None):
        """Initialize repository with database session."""
        self.session = session
        self.feed = feed
        self.users = UserRepository(session)
        self.notifications = NotificationRepository(session, feed)

    async def _publish(self, table: str, user_id: int, action: str, row_id: Optional[int] = None) -> None:
        if self.feed is not None:
            await self.feed.publish(ChangeEvent(table, user_id, action, row_id))

    async def get_couple(self, user_id: int) -> Optional[Couple]:
        result = await self.session.execute(
            select(Couple).where(or_(Couple.user1_id == user_id, Couple.user2_id == user_id))
        )
        return result.scalars().first()

    async def get_partner(self, user: User) -> Optional[Tuple[User, Couple]]:
        couple = await self.get_couple(user.id)
        if couple is None:
            return None
        partner = await self.users.get_by_id(couple.partner_of(user.id))
        if partner is None:
            return None
        return partner, couple

    @staticmethod
    def partner_view(partner: User, couple: Couple) -> schemas.Partner:
        return schemas.Partner(
            id=partner.id,
            email=partner.email,
            first_name=partner.first_name,
            last_name=partner.last_name,
            full_name=partner.full_name,
            wedding_date=partner.wedding_date,
            relationship_status=couple.relationship_status,
            connected_at=couple.connected_at,
        )

    async def _unique_code(self) -> str:
        for _ in range(10):
            code = generate_invitation_code()
            result = await self.session.execute(
                select(PartnerInvitation.id).where(PartnerInvitation.invitation_code == code)
            )
            if result.scalar_one_or_none() is None:
                return code
        raise ConflictError("Could not generate a unique invitation code, please try again")

    async def _expire_pending(self, inviter_ids: List[int], keep_id: Optional[int] = None) -> None:
        query = update(PartnerInvitation).where(
            PartnerInvitation.inviter_id.in_(inviter_ids),
            PartnerInvitation.status == "pending",
        )
        if keep_id is not None:
            query = query.where(PartnerInvitation.id != keep_id)
        await self.session.execute(query.values(status="expired", updated_at=utcnow()))

    async def expire_stale(self) -> None:
        """Mark pending invitations past their expiry as expired."""
        await self.session.execute(
            update(PartnerInvitation)
            .where(PartnerInvitation.status == "pending", PartnerInvitation.expires_at < utcnow())
            .values(status="expired", updated_at=utcnow())
        )
        await self.session.commit()

    async def create_invitation(self, inviter: User, invitee_email: Optional[str]) -> PartnerInvitation:
        """
        Create an email or code invitation.

        Any earlier pending invitation from the same inviter is expired, so each
        user has at most one pending invitation.
        """
        if inviter.partner_id is not None or await self.get_couple(inviter.id) is not None:
            raise ConflictError("You are already connected to a partner")

        email = None
        if invitee_email:
            email = normalize_email(invitee_email)
            if not validate_email(email):
                raise AppError("Please enter a valid email address")
            if email == inviter.email:
                raise AppError("You cannot invite yourself")

        await self._expire_pending([inviter.id])
        invitation = PartnerInvitation(
            inviter_id=inviter.id,
            invitee_email=email,
            invitation_code=await self._unique_code(),
            invitation_type="email" if email else "code",
            status="pending",
            expires_at=utcnow() + timedelta(days=settings.INVITATION_EXPIRE_DAYS),
        )
        self.session.add(invitation)
        await self.session.commit()
        await self.session.refresh(invitation)
        logger.info("invitation_created", inviter_id=inviter.id, type=invitation.invitation_type)
        await self._publish("partner_invitations", inviter.id, "INSERT", invitation.id)

        if email:
            invitee = await self.users.get_by_email(email)
            if invitee is not None:
                await self.notifications.notify(
                    invitee.id,
                    "partner_invitation",
                    "Partner invitation",
                    f"{display_name(inviter)} invited you to connect as partners.",
                    {"invitation_id": invitation.id, "invitation_code": invitation.invitation_code},
                )
        return invitation

    async def list_invitations(self, user: User) -> schemas.Invitations:
        await self.expire_stale()
        sent = await self.session.execute(
            select(PartnerInvitation)
            .where(PartnerInvitation.inviter_id == user.id)
            .order_by(PartnerInvitation.created_at.desc(), PartnerInvitation.id.desc())
        )
        received = await self.session.execute(
            select(PartnerInvitation)
            .where(PartnerInvitation.invitee_email == user.email)
            .order_by(PartnerInvitation.created_at.desc(), PartnerInvitation.id.desc())
        )
        return schemas.Invitations(
            sent=[schemas.Invitation.model_validate(i) for i in sent.scalars().all()],
            received=[schemas.Invitation.model_validate(i) for i in received.scalars().all()],
        )

    async def _find(self, invitation_code: Optional[str], invitation_id: Optional[int]) -> PartnerInvitation:
        if invitation_code:
            query = select(PartnerInvitation).where(
                PartnerInvitation.invitation_code == normalize_invitation_code(invitation_code)
            )
        else:
            query = select(PartnerInvitation).where(PartnerInvitation.id == invitation_id)
        invitation = (await self.session.execute(query)).scalar_one_or_none()
        if invitation is None:
            raise NotFoundError("Invitation not found")
        return invitation

    async def _check_pending(self, invitation: PartnerInvitation) -> None:
        if invitation.status == "pending" and invitation.expires_at < utcnow():
            invitation.status = "expired"
            await self.session.commit()
        if invitation.status == "expired":
            raise ConflictError("This invitation has expired")
        if invitation.status != "pending":
            raise ConflictError(f"This invitation has already been {invitation.status}")

    async def accept(
        self, user: User, invitation_code: Optional[str] = None, invitation_id: Optional[int] = None
    ) -> Couple:
        invitation = await self._find(invitation_code, invitation_id)
        await self._check_pending(invitation)

        if invitation.inviter_id == user.id:
            raise AppError("You cannot accept your own invitation")
        if invitation.invitation_type == "email" and invitation.invitee_email != user.email:
            raise PermissionDeniedError("This invitation was sent to a different email address")

        inviter = await self.users.get_by_id(invitation.inviter_id)
        if inviter is None:
            raise NotFoundError("Invitation not found")
        if user.partner_id is not None or await self.get_couple(user.id) is not None:
            raise ConflictError("You are already connected to a partner")
        if inviter.partner_id is not None or await self.get_couple(inviter.id) is not None:
            raise ConflictError("The inviter is already connected to a partner")

        now = utcnow()
        couple = Couple(user1_id=inviter.id, user2_id=user.id, connected_at=now)
        self.session.add(couple)
        inviter.partner_id = user.id
        user.partner_id = inviter.id
        invitation.status = "accepted"
        invitation.accepted_at = now
        await self._expire_pending([inviter.id, user.id], keep_id=invitation.id)
        await self.session.commit()
        await self.session.refresh(couple)
        logger.info("partners_connected", couple_id=couple.id, user1_id=inviter.id, user2_id=user.id)

        for user_id in (inviter.id, user.id):
            await self._publish("couples", user_id, "INSERT", couple.id)
        await self.notifications.notify(
            inviter.id,
            "partner_accepted",
            "Invitation accepted",
            f"{display_name(user)} accepted your invitation. You are now connected.",
            {"partner_id": user.id},
        )
        return couple

    async def decline(self, user: User, invitation_id: int) -> PartnerInvitation:
        """Decline an email invitation; code invitations have no addressee and can only expire."""
        invitation = await self._find(None, invitation_id)
        if invitation.invitee_email != user.email:
            raise NotFoundError("Invitation not found")
        await self._check_pending(invitation)

        invitation.status = "declined"
        await self.session.commit()
        await self.session.refresh(invitation)
        await self.notifications.notify(
            invitation.inviter_id,
            "partner_declined",
            "Invitation declined",
            f"{display_name(user)} declined your invitation.",
            {"invitation_id": invitation.id},
        )
        return invitation

    async def disconnect(self, user: User) -> bool:
        """Remove the couple and notify both sides; False when not connected."""
        couple = await self.get_couple(user.id)
        if couple is None:
            return False
        partner_id = couple.partner_of(user.id)
        couple_id = couple.id
        await self.session.execute(
            update(User).where(User.id.in_([user.id, partner_id])).values(partner_id=None)
        )
        await self.session.delete(couple)
        await self.session.commit()
        user.partner_id = None
        logger.info("partners_disconnected", couple_id=couple_id, user_id=user.id, partner_id=partner_id)

        for user_id in (user.id, partner_id):
            await self._publish("couples", user_id, "DELETE", couple_id)
        await self.notifications.notify(
            partner_id,
            "partner_disconnected",
            "Partner disconnected",
            f"{display_name(user)} disconnected from you.",
        )
        await self.notifications.notify(
            user.id,
            "partner_disconnected",
            "Partner disconnected",
            "You are no longer connected to your partner.",
        )
        return True
