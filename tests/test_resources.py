from components.resources.models import Resource


async def test_list_and_filter(client, content):
    titles = [r["title"] for r in (await client.get("/resources")).json()]
    # featured first
    assert titles == ["Before You Tie The Knot", "The 5 Love Languages"]

    response = await client.get("/resources", params={"type": "link"})
    assert [r["title"] for r in response.json()] == ["The 5 Love Languages"]

    response = await client.get("/resources", params={"search": "MENK"})
    assert [r["title"] for r in response.json()] == ["Before You Tie The Knot"]

    response = await client.get("/resources", params={"category": "Communication", "featured": "true"})
    assert response.json() == []


async def test_favorites_are_idempotent(client, auth, content):
    resource_id = content["resources"][1].id
    for _ in range(2):
        response = await client.post(f"/resources/{resource_id}/favorite", headers=auth)
        assert response.status_code == 200
        assert response.json() == {"resource_id": resource_id, "is_favorite": True}

    favorites = (await client.get("/resources/favorites", headers=auth)).json()
    assert [f["id"] for f in favorites] == [resource_id]
    assert favorites[0]["is_favorite"] is True

    for _ in range(2):
        response = await client.delete(f"/resources/{resource_id}/favorite", headers=auth)
        assert response.json()["is_favorite"] is False
    assert (await client.get("/resources/favorites", headers=auth)).json() == []


async def test_favorite_unknown_resource(client, auth, content):
    response = await client.post("/resources/9999/favorite", headers=auth)
    assert response.status_code == 404


async def test_search_treats_wildcards_literally(client, session, content):
    session.add(Resource(title="100% Halal Finance", type="article", author="Ibn_Khaldun Society"))
    await session.commit()

    response = await client.get("/resources", params={"search": "%"})
    assert [r["title"] for r in response.json()] == ["100% Halal Finance"]

    response = await client.get("/resources", params={"search": "n_k"})
    assert [r["title"] for r in response.json()] == ["100% Halal Finance"]

    response = await client.get("/resources", params={"search": "m_n"})
    assert response.json() == []
