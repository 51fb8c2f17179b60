async def test_read_profile(client, auth):
    response = await client.get("/profile", headers=auth)
    assert response.status_code == 200
    body = response.json()
    assert body["first_name"] == "Amina"
    assert body["theme_mode"] == "system"


async def test_update_profile(client, auth):
    response = await client.put(
        "/profile",
        headers=auth,
        json={"first_name": "Aminah", "wedding_date": "2026-06-01", "marital_status": "Engaged", "theme_mode": "dark"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["full_name"] == "Aminah Khan"
    assert body["wedding_date"] == "2026-06-01"
    assert body["marital_status"] == "Engaged"
    assert body["theme_mode"] == "dark"


async def test_update_profile_rejects_bad_values(client, auth):
    response = await client.put("/profile", headers=auth, json={"last_name": "K4han"})
    assert response.status_code == 422
    assert "last_name" in response.json()["errors"]

    response = await client.put("/profile", headers=auth, json={"gender": "other"})
    assert response.status_code == 422


async def test_password_strength(client):
    response = await client.get("/profile/password-strength", params={"password": "Secret123"})
    assert response.status_code == 200
    assert response.json() == {"strength": "strong", "score": 80, "feedback": []}


async def test_update_profile_rejects_null_theme(client, auth):
    response = await client.put("/profile", headers=auth, json={"theme_mode": None})
    assert response.status_code == 422
    assert "theme_mode cannot be null" in response.text

    response = await client.put("/profile", headers=auth, json={"wedding_date": None, "city": None})
    assert response.status_code == 200
    assert response.json()["theme_mode"] == "system"
