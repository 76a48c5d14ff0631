from fastapi.testclient import TestClient

from iconbadges import create_app


def test_app_factory_healthcheck():
    app = create_app()
    client = TestClient(app)
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_service_routes_are_not_relayed_upstream(client, upstream):
    assert client.get("/icons").status_code == 200
    assert client.get("/icons/").status_code == 200
    assert client.get("/healthz").status_code == 200
    assert upstream.urls == []
