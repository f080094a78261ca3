from fastapi.testclient import TestClient

from scene_engines.server import create_app


def test_health():
    resp = TestClient(create_app()).get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_configz_reports_presence_only(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "https://db.example.com")
    monkeypatch.setenv("IDENTITY_API_KEY", "very-secret")
    monkeypatch.delenv("BLOB_BUCKET", raising=False)
    monkeypatch.delenv("AWS_BUCKET_NAME", raising=False)
    monkeypatch.setenv("BLOB_STORE_BACKEND", "memory")
    resp = TestClient(create_app()).get("/configz")
    body = resp.json()
    assert body["has_database_url"] is True
    assert body["has_identity_api_key"] is True
    assert body["has_blob_bucket"] is False
    assert body["blob_store_in_memory"] is True
    assert "very-secret" not in resp.text


def test_unknown_route_uses_error_envelope():
    resp = TestClient(create_app()).get("/nope")
    assert resp.status_code == 404
    assert resp.json()["error"]["http_status"] == 404
