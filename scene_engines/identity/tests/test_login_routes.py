from fastapi.testclient import TestClient

from scene_engines.common.errors import UpstreamUnavailable
from scene_engines.document_store.repository import InMemoryDocumentStore
from scene_engines.identity.auth import get_provider, get_user_directory
from scene_engines.identity.provider import InMemoryIdentityProvider, set_identity_provider
from scene_engines.identity.users import UserDirectory
from scene_engines.server import create_app


def _client(users_store=None, provider=None):
    provider = provider or InMemoryIdentityProvider()
    provider.add_account("admin@x.com", "pw", uid="u-admin")
    store = users_store if users_store is not None else InMemoryDocumentStore({"users": {"u-admin": {"role": "admin"}}})
    app = create_app()
    app.dependency_overrides[get_provider] = lambda: provider
    app.dependency_overrides[get_user_directory] = lambda: UserDirectory(store=store)
    return TestClient(app), provider


def test_login_returns_token_and_role():
    client, provider = _client()
    resp = client.post("/auth/login", json={"email": "admin@x.com", "password": "pw"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["uid"] == "u-admin"
    assert body["role"] == "Admin"
    assert provider.lookup_uid(body["idToken"]) == "u-admin"


def test_login_rejects_bad_password():
    client, _ = _client()
    resp = client.post("/auth/login", json={"email": "admin@x.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "auth.invalid_credentials"


def test_login_defaults_to_staff_when_profile_unreadable():
    class DownStore(InMemoryDocumentStore):
        def get(self, ctx, path):
            raise UpstreamUnavailable("down")

    client, _ = _client(users_store=DownStore())
    resp = client.post("/auth/login", json={"email": "admin@x.com", "password": "pw"})
    assert resp.status_code == 200
    assert resp.json()["role"] == "Staff"


def test_login_provider_unavailable():
    class DownProvider(InMemoryIdentityProvider):
        def sign_in(self, email, password):
            raise UpstreamUnavailable("timeout")

    client, _ = _client(provider=DownProvider())
    resp = client.post("/auth/login", json={"email": "admin@x.com", "password": "pw"})
    assert resp.status_code == 503


def test_login_validates_body():
    client, _ = _client()
    resp = client.post("/auth/login", json={"email": "a"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "validation.error"


def test_unconfigured_provider_is_service_unavailable(monkeypatch):
    monkeypatch.delenv("IDENTITY_API_KEY", raising=False)
    monkeypatch.delenv("FIREBASE_WEB_API_KEY", raising=False)
    set_identity_provider(None)
    client = TestClient(create_app())

    resp = client.post("/auth/login", json={"email": "admin@x.com", "password": "pw"})
    assert resp.status_code == 503
    assert resp.json()["error"]["code"] == "auth.provider_unavailable"

    resp = client.patch(
        "/scenes/metadata",
        json={"sceneId": "s1", "building": "B1"},
        headers={"Authorization": "Bearer tok"},
    )
    assert resp.status_code == 503
    assert resp.json()["error"]["code"] == "auth.provider_unavailable"
