from conftest import PASSWORD, bearer, register


async def test_register_returns_user_and_tokens(client):
    body = await register(client, "Amina@Example.com ", first_name="Amina", last_name="Khan")
    assert body["email"] == "amina@example.com"
    assert body["full_name"] == "Amina Khan"
    assert body["role"] == "user"
    assert body["access_token"] and body["refresh_token"]


async def test_register_validates_every_field(client):
    response = await client.post(
        "/auth/register",
        json={"email": "not-an-email", "password": "short", "first_name": "R2"},
    )
    assert response.status_code == 422
    errors = response.json()["errors"]
    assert set(errors) == {"email", "password", "first_name"}


async def test_duplicate_email_is_rejected(client, user):
    response = await client.post("/auth/register", json={"email": "AMINA@example.com", "password": PASSWORD})
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


async def test_login(client, user):
    response = await client.post("/auth/login", data={"username": "amina@example.com", "password": PASSWORD})
    assert response.status_code == 200
    assert response.json()["id"] == user["id"]

    response = await client.post("/auth/login", data={"username": "amina@example.com", "password": "Wrong123"})
    assert response.status_code == 401


async def test_protected_route_requires_token(client):
    assert (await client.get("/profile")).status_code == 401
    response = await client.get("/profile", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


async def test_refresh_issues_new_pair(client, user):
    response = await client.post("/auth/refresh", json={"refresh_token": user["refresh_token"]})
    assert response.status_code == 200
    tokens = response.json()
    assert (await client.get("/profile", headers=bearer(tokens))).status_code == 200


async def test_access_and_refresh_tokens_are_not_interchangeable(client, user):
    response = await client.post("/auth/refresh", json={"refresh_token": user["access_token"]})
    assert response.status_code == 401
    response = await client.get("/profile", headers={"Authorization": f"Bearer {user['refresh_token']}"})
    assert response.status_code == 401


async def test_password_reset_flow(client, user):
    response = await client.post("/auth/password-reset", json={"email": "amina@example.com"})
    assert response.status_code == 202
    token = response.json()["reset_token"]

    response = await client.post("/auth/password-reset/confirm", json={"token": token, "new_password": "NewSecret1"})
    assert response.status_code == 200

    login = await client.post("/auth/login", data={"username": "amina@example.com", "password": "NewSecret1"})
    assert login.status_code == 200

    # a reset token works once
    response = await client.post("/auth/password-reset/confirm", json={"token": token, "new_password": "Another123"})
    assert response.status_code == 400


async def test_password_reset_does_not_reveal_unknown_emails(client):
    response = await client.post("/auth/password-reset", json={"email": "nobody@example.com"})
    assert response.status_code == 202
    assert response.json()["reset_token"] is None


async def test_password_reset_rejects_weak_password(client, user):
    response = await client.post("/auth/password-reset", json={"email": "amina@example.com"})
    token = response.json()["reset_token"]
    response = await client.post("/auth/password-reset/confirm", json={"token": token, "new_password": "weak"})
    assert response.status_code == 422
    assert "new_password" in response.json()["errors"]
