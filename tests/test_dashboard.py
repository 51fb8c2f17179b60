from datetime import date, timedelta

from components.dashboard.repository import days_until, readiness_score, readiness_status


def test_readiness_weights():
    readiness = readiness_score(100, 50, 25)
    # 50 + 15 + 5
    assert readiness.overall_percent == 70
    assert readiness.status == "in_progress"


def test_readiness_status_thresholds():
    assert readiness_status(0) == "not_started"
    assert readiness_status(10) == "beginning"
    assert readiness_status(25) == "in_progress"
    assert readiness_status(75) == "almost_ready"
    assert readiness_status(100) == "ready"


def test_days_until():
    today = date(2025, 3, 1)
    assert days_until(date(2025, 3, 31), today) == 30
    assert days_until(date(2025, 2, 27), today) == -2
    assert days_until(None, today) is None


async def test_empty_dashboard(client, auth, content):
    response = await client.get("/dashboard", headers=auth)
    assert response.status_code == 200
    body = response.json()
    assert body["first_name"] == "Amina"
    assert body["days_until_wedding"] is None
    assert body["checklist"] == {"completed": 0, "total": 4, "percent": 0}
    assert body["modules"] == {"completed": 0, "total": 1, "percent": 0}
    assert body["budget"]["has_budget"] is False
    assert body["readiness"]["status"] == "not_started"
    assert body["has_partner"] is False


async def test_dashboard_reflects_progress(client, auth, content):
    wedding = date.today() + timedelta(days=100)
    await client.put("/profile", headers=auth, json={"wedding_date": wedding.isoformat()})
    for item in content["items"][:2]:
        await client.put(f"/checklist/items/{item.id}", headers=auth, json={"is_completed": True})
    for lesson in content["modules"][0].lessons:
        await client.put(f"/modules/foundations/lessons/{lesson.id}", headers=auth, json={"is_completed": True})
    await client.put(f"/discussions/{content['prompts'][0].id}", headers=auth, json={"is_discussed": True})
    await client.put("/financial/budget", headers=auth, json={"income_his": 1000, "expense_housing": 1200})

    body = (await client.get("/dashboard", headers=auth)).json()
    assert body["days_until_wedding"] == 100
    assert body["checklist"]["percent"] == 50
    assert body["modules"] == {"completed": 1, "total": 1, "percent": 100}
    assert body["discussions"] == {"completed": 1, "total": 3, "percent": 33}
    assert body["budget"]["has_budget"] is True
    assert body["budget"]["on_track"] is False
    # 50 * 0.5 + 100 * 0.3 + 33 * 0.2 = 61.6
    assert body["readiness"]["overall_percent"] == 62
    assert body["readiness"]["status"] == "in_progress"
