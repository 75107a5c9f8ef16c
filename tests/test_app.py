from fastapi.testclient import TestClient

from linguastore.core.app import create_app


def test_healthcheck_returns_ok() -> None:
    app = create_app()
    client = TestClient(app)

    response = client.get("/api/healthz")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"


def test_root_reports_service_name() -> None:
    client = TestClient(create_app())

    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["service"] == "Linguastore API"


def test_unknown_route_uses_error_envelope() -> None:
    client = TestClient(create_app())

    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    payload = response.json()
    assert payload["code"] == 404
    assert payload["message"] == "Not Found"
    assert "error" in payload
