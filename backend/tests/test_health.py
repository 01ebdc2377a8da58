def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "store": "memory", "store_connected": True}


def test_ping(client):
    assert client.get("/api/ping").json() == {"message": "pong"}


def test_openapi_declares_bearer_auth(client):
    response = client.get("/docs/openapi.json")

    assert response.status_code == 200
    schema = response.json()
    assert schema["info"]["title"] == "Contact Management API"
    assert schema["components"]["securitySchemes"]["bearerAuth"]["scheme"] == "bearer"
    assert "/api/contacts/{contact_id}" in schema["paths"]
