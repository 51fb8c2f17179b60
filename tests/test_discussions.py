from conftest import bearer, connect


async def test_prompts_grouped_by_category(client, auth, content):
    body = (await client.get("/discussions", headers=auth)).json()
    assert [c["category"] for c in body["categories"]] == ["values", "finances"]
    assert body["categories"][0]["total"] == 2
    assert body["discussed"] == 0
    assert body["total"] == 3
    assert body["categories"][0]["prompts"][0]["questions"] == ["How important is Islam?"]


async def test_save_notes_and_discussed_at(client, auth, content):
    prompt_id = content["prompts"][0].id
    response = await client.put(
        f"/discussions/{prompt_id}", headers=auth, json={"notes": "We pray together", "is_discussed": True}
    )
    assert response.status_code == 200
    notes = response.json()
    assert notes["discussed_at"] is not None

    response = await client.put(f"/discussions/{prompt_id}", headers=auth, json={"is_discussed": False})
    notes = response.json()
    assert notes["discussed_at"] is None
    assert notes["notes"] == "We pray together"

    response = await client.put("/discussions/9999", headers=auth, json={"notes": "x"})
    assert response.status_code == 404


async def test_discussed_counts(client, auth, content):
    await client.put(f"/discussions/{content['prompts'][2].id}", headers=auth, json={"is_discussed": True})
    body = (await client.get("/discussions", headers=auth)).json()
    assert body["discussed"] == 1
    assert body["categories"][1]["discussed"] == 1


async def test_partner_sees_only_shared_notes(client, user, auth, partner_user, content):
    assert (await client.get("/discussions/partner", headers=auth)).status_code == 404

    await connect(client, user, partner_user)
    await client.put(
        f"/discussions/{content['prompts'][0].id}",
        headers=auth,
        json={"notes": "Shared thoughts", "discuss_with_partner": True},
    )
    await client.put(f"/discussions/{content['prompts'][1].id}", headers=auth, json={"notes": "Private"})

    response = await client.get("/discussions/partner", headers=bearer(partner_user))
    assert response.status_code == 200
    shared = response.json()
    assert [n["notes"] for n in shared] == ["Shared thoughts"]
    assert shared[0]["prompt_title"] == "Core Islamic Values"
