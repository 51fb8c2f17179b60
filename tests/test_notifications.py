from conftest import bearer, connect


async def _notified_user(client, user, partner_user):
    await connect(client, user, partner_user)
    await client.delete("/partner", headers=bearer(partner_user))
    # user now holds partner_accepted and partner_disconnected
    return bearer(user)


async def test_unread_count_and_mark_read(client, user, partner_user):
    headers = await _notified_user(client, user, partner_user)
    assert (await client.get("/notifications/unread-count", headers=headers)).json() == {"unread": 2}

    newest = (await client.get("/notifications", headers=headers)).json()[0]
    assert newest["type"] == "partner_disconnected"
    response = await client.post(f"/notifications/{newest['id']}/read", headers=headers)
    assert response.status_code == 200
    assert response.json()["read"] is True
    assert response.json()["read_at"] is not None

    unread = (await client.get("/notifications", headers=headers, params={"unread_only": "true"})).json()
    assert [n["type"] for n in unread] == ["partner_accepted"]

    assert (await client.post("/notifications/read-all", headers=headers)).json() == {"unread": 0}


async def test_notifications_are_private(client, user, partner_user):
    headers = await _notified_user(client, user, partner_user)
    notification_id = (await client.get("/notifications", headers=headers)).json()[0]["id"]

    other = bearer(partner_user)
    assert (await client.post(f"/notifications/{notification_id}/read", headers=other)).status_code == 404
    assert (await client.delete(f"/notifications/{notification_id}", headers=other)).status_code == 404

    assert (await client.delete(f"/notifications/{notification_id}", headers=headers)).status_code == 204
    assert len((await client.get("/notifications", headers=headers)).json()) == 1


async def test_preferences_default_on(client, auth):
    body = (await client.get("/notifications/preferences", headers=auth)).json()
    assert body["record"] is None
    assert body["summary"]["partner_accepted"] is True


async def test_disabled_preference_suppresses_notification(client, user, partner_user):
    response = await client.put(
        "/notifications/preferences", headers=bearer(user), json={"partner_accepted": False}
    )
    assert response.status_code == 200
    assert response.json()["summary"]["partner_accepted"] is False

    await connect(client, user, partner_user)
    assert (await client.get("/notifications", headers=bearer(user))).json() == []


async def test_preferences_reject_null(client, auth):
    response = await client.put("/notifications/preferences", headers=auth, json={"module_updates": None})
    assert response.status_code == 422
    assert "module_updates" in response.json()["errors"]
