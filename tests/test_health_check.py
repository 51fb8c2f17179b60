async def test_health_check(client):
    response = await client.get("/health_check/")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service_name"]
