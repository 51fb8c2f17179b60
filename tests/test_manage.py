CHECKLIST_TSV = (
    "category_slug\ttitle\tdescription\tis_required\tsort_order\n"
    "spiritual\tLearn the Nikah Khutbah\tStudy its meaning\ttrue\t3\n"
    "financial\tOpen a Joint Account\t\tno\t9\n"
)


def upload(content, filename="items.tsv"):
    return {"file": (filename, content.encode("utf-8"), "text/tab-separated-values")}


async def test_requires_admin(client, auth):
    response = await client.get("/manage/stats", headers=auth)
    assert response.status_code == 403
    assert response.json()["detail"] == "Admin access required"


async def test_upload_checklist(client, auth, admin_auth, content):
    response = await client.post("/manage/checklist/upload", headers=admin_auth, files=upload(CHECKLIST_TSV))
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "2 checklist items uploaded successfully"

    checklist = (await client.get("/checklist", headers=auth)).json()
    financial = next(c for c in checklist["categories"] if c["slug"] == "financial")
    added = financial["items"][-1]
    assert added["title"] == "Open a Joint Account"
    assert added["is_required"] is False
    assert checklist["summary"]["total"] == 6


async def test_upload_rejects_bad_rows(client, admin_auth, content):
    bad = (
        "category_slug\ttitle\tdescription\tis_required\tsort_order\n"
        "spiritual\tFine row\t\ttrue\t1\n"
        "unknown\tSomething\t\ttrue\t2\n"
        "spiritual\t   \t\ttrue\t3\n"
        "spiritual\tOdd flag\t\tmaybe\t4\n"
    )
    body = (await client.post("/manage/checklist/upload", headers=admin_auth, files=upload(bad))).json()
    assert body["success"] is False
    assert [error["row"] for error in body["errors"]] == [3, 4, 5]
    assert body["errors"][0]["message"] == "Unknown category 'unknown'"

    stats = (await client.get("/manage/stats", headers=admin_auth)).json()
    assert stats["checklist_items"] == 4


async def test_upload_rejects_extension(client, admin_auth):
    response = await client.post(
        "/manage/checklist/upload", headers=admin_auth, files=upload(CHECKLIST_TSV, "items.xlsx")
    )
    assert response.json()["success"] is False
    assert "Invalid file format" in response.json()["message"]


async def test_upload_requires_columns(client, admin_auth, content):
    body = (
        await client.post("/manage/checklist/upload", headers=admin_auth, files=upload("name\tvalue\na\tb\n"))
    ).json()
    assert body["success"] is False
    assert body["message"].startswith("CSV file must contain columns")


async def test_resource_crud(client, auth, admin_auth):
    response = await client.post(
        "/manage/resources",
        headers=admin_auth,
        json={"title": "Fiqh of Marriage", "type": "article", "category": "Islamic Guidance"},
    )
    assert response.status_code == 201
    resource_id = response.json()["id"]

    response = await client.put(f"/manage/resources/{resource_id}", headers=admin_auth, json={"is_featured": True})
    assert response.json()["is_featured"] is True
    assert response.json()["title"] == "Fiqh of Marriage"

    assert (await client.delete(f"/manage/resources/{resource_id}", headers=admin_auth)).status_code == 204
    assert (await client.delete(f"/manage/resources/{resource_id}", headers=admin_auth)).status_code == 404
    titles = [r["title"] for r in (await client.get("/resources", headers=auth)).json()]
    assert "Fiqh of Marriage" not in titles


async def test_publish_module(client, auth, admin_auth, content):
    assert (await client.get("/modules/draft")).status_code == 404

    response = await client.put("/manage/modules/draft/publish", headers=admin_auth, json={"is_published": True})
    assert response.status_code == 200
    assert response.json()["slug"] == "draft"

    assert (await client.get("/modules/draft")).status_code == 200
    assert (await client.get("/dashboard", headers=auth)).json()["modules"]["total"] == 2


async def test_stats(client, auth, admin_auth, content):
    await client.put("/financial/mahr", headers=auth, json={"amount": 5000})
    stats = (await client.get("/manage/stats", headers=admin_auth)).json()
    assert stats["users"] == 2
    assert stats["modules"] == 2
    assert stats["published_modules"] == 1
    assert stats["discussion_prompts"] == 3
    assert stats["resources"] == 2
    assert stats["rows"]["mahr"] == 1


async def test_update_resource_rejects_null_required_fields(client, admin_auth, content):
    resource_id = content["resources"][0].id
    for field in ("title", "type", "is_featured"):
        response = await client.put(f"/manage/resources/{resource_id}", headers=admin_auth, json={field: None})
        assert response.status_code == 422, field
        assert f"{field} cannot be null" in response.text

    response = await client.put(f"/manage/resources/{resource_id}", headers=admin_auth, json={"author": None})
    assert response.status_code == 200
    assert response.json()["author"] is None
    assert response.json()["title"] == "Before You Tie The Knot"
