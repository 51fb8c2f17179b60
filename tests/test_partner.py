from datetime import timedelta

from sqlalchemy import update

from components.core.database import utcnow
from components.partner.models import PartnerInvitation
from conftest import bearer, connect, register


async def test_code_invitation_connects_both_sides(client, user, partner_user):
    partner = await connect(client, user, partner_user)
    assert partner["id"] == user["id"]
    assert partner["relationship_status"] == "preparing"

    response = await client.get("/partner", headers=bearer(user))
    assert response.status_code == 200
    assert response.json()["email"] == "yusuf@example.com"

    profile = (await client.get("/profile", headers=bearer(partner_user))).json()
    assert profile["partner_id"] == user["id"]


async def test_inviter_is_notified_on_accept(client, user, partner_user):
    await connect(client, user, partner_user)
    notifications = (await client.get("/notifications", headers=bearer(user))).json()
    assert [n["type"] for n in notifications] == ["partner_accepted"]


async def test_email_invitation_must_match_accepter(client, user, partner_user):
    stranger = await register(client, "stranger@example.com")
    response = await client.post(
        "/partner/invitations", headers=bearer(user), json={"invitee_email": "Yusuf@Example.com"}
    )
    assert response.status_code == 201
    invitation = response.json()
    assert invitation["invitation_type"] == "email"
    assert invitation["invitee_email"] == "yusuf@example.com"

    # the invitee hears about it
    notifications = (await client.get("/notifications", headers=bearer(partner_user))).json()
    assert notifications[0]["type"] == "partner_invitation"

    response = await client.post(
        "/partner/invitations/accept", headers=bearer(stranger), json={"invitation_id": invitation["id"]}
    )
    assert response.status_code == 403

    response = await client.post(
        "/partner/invitations/accept", headers=bearer(partner_user), json={"invitation_id": invitation["id"]}
    )
    assert response.status_code == 200


async def test_only_one_pending_invitation(client, user):
    first = (await client.post("/partner/invitations", headers=bearer(user), json={})).json()
    second = (await client.post("/partner/invitations", headers=bearer(user), json={})).json()
    assert first["invitation_code"] != second["invitation_code"]

    sent = (await client.get("/partner/invitations", headers=bearer(user))).json()["sent"]
    statuses = {i["id"]: i["status"] for i in sent}
    assert statuses == {first["id"]: "expired", second["id"]: "pending"}


async def test_invitation_codes_look_right(client, user):
    code = (await client.post("/partner/invitations", headers=bearer(user), json={})).json()["invitation_code"]
    assert code.startswith("NIKAH-")
    assert len(code) == len("NIKAH-") + 6


async def test_cannot_invite_self_or_accept_own(client, user):
    response = await client.post(
        "/partner/invitations", headers=bearer(user), json={"invitee_email": "amina@example.com"}
    )
    assert response.status_code == 400

    code = (await client.post("/partner/invitations", headers=bearer(user), json={})).json()["invitation_code"]
    response = await client.post("/partner/invitations/accept", headers=bearer(user), json={"invitation_code": code})
    assert response.status_code == 400


async def test_cannot_connect_twice(client, user, partner_user):
    await connect(client, user, partner_user)
    third = await register(client, "third@example.com")

    response = await client.post("/partner/invitations", headers=bearer(user), json={})
    assert response.status_code == 409

    code = (await client.post("/partner/invitations", headers=bearer(third), json={})).json()["invitation_code"]
    response = await client.post(
        "/partner/invitations/accept", headers=bearer(partner_user), json={"invitation_code": code}
    )
    assert response.status_code == 409


async def test_used_code_cannot_be_reused(client, user, partner_user):
    code = (await client.post("/partner/invitations", headers=bearer(user), json={})).json()["invitation_code"]
    await client.post("/partner/invitations/accept", headers=bearer(partner_user), json={"invitation_code": code})
    third = await register(client, "third@example.com")
    response = await client.post("/partner/invitations/accept", headers=bearer(third), json={"invitation_code": code})
    assert response.status_code == 409


async def test_accept_requires_a_reference(client, user):
    response = await client.post("/partner/invitations/accept", headers=bearer(user), json={})
    assert response.status_code == 422
    response = await client.post(
        "/partner/invitations/accept", headers=bearer(user), json={"invitation_code": "NIKAH-ZZZZZZ"}
    )
    assert response.status_code == 404


async def test_decline(client, user, partner_user):
    invitation = (
        await client.post("/partner/invitations", headers=bearer(user), json={"invitee_email": "yusuf@example.com"})
    ).json()
    response = await client.post(f"/partner/invitations/{invitation['id']}/decline", headers=bearer(partner_user))
    assert response.status_code == 200
    assert response.json()["status"] == "declined"

    notifications = (await client.get("/notifications", headers=bearer(user))).json()
    assert notifications[0]["type"] == "partner_declined"

    received = (await client.get("/partner/invitations", headers=bearer(partner_user))).json()["received"]
    assert received[0]["status"] == "declined"


async def test_disconnect_notifies_both(client, user, partner_user):
    await connect(client, user, partner_user)
    response = await client.delete("/partner", headers=bearer(partner_user))
    assert response.status_code == 204

    assert (await client.get("/partner", headers=bearer(user))).status_code == 404
    assert (await client.delete("/partner", headers=bearer(user))).status_code == 404

    types = [n["type"] for n in (await client.get("/notifications", headers=bearer(user))).json()]
    assert "partner_disconnected" in types
    types = [n["type"] for n in (await client.get("/notifications", headers=bearer(partner_user))).json()]
    assert types == ["partner_disconnected"]

    # both are free to connect again
    await connect(client, partner_user, user)


async def test_expired_invitation_cannot_be_accepted(client, session, user, partner_user):
    response = await client.post("/partner/invitations", headers=bearer(user), json={})
    invitation_id = response.json()["id"]
    await session.execute(
        update(PartnerInvitation)
        .where(PartnerInvitation.id == invitation_id)
        .values(expires_at=utcnow() - timedelta(minutes=1))
    )
    await session.commit()

    response = await client.post(
        "/partner/invitations/accept", headers=bearer(partner_user), json={"invitation_id": invitation_id}
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "This invitation has expired"


async def test_code_invitation_cannot_be_declined(client, user, partner_user):
    response = await client.post("/partner/invitations", headers=bearer(user), json={})
    invitation_id = response.json()["id"]
    response = await client.post(f"/partner/invitations/{invitation_id}/decline", headers=bearer(partner_user))
    assert response.status_code == 404
