from sqlalchemy.exc import OperationalError

from rakshak.core import db as db_module


def test_health_public_and_connected(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["database"] == "connected"


def test_health_reports_database_outage(client, monkeypatch):
    def _down():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(db_module, "ping_database", _down)
    resp = client.get("/api/health")
    assert resp.status_code == 503
    assert resp.json()["database"] == "unavailable"


def test_cors_preflight_allowed(client):
    resp = client.options(
        "/api/auth/login",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
    )
    assert resp.status_code == 200
    assert resp.headers.get("access-control-allow-origin") in {"*", "http://localhost:5173"}


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}
