import json

import httpx
import pytest

from scene_engines.common.errors import UpstreamUnavailable
from scene_engines.identity.provider import (
    AuthenticationFailed,
    IdentityToolkitProvider,
    InMemoryIdentityProvider,
)


def _provider(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return IdentityToolkitProvider(api_key="web-key", base_url="https://id.example.com/v1", timeout=2, client=client)


def test_sign_in_posts_password_grant():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            json={"idToken": "tok", "localId": "uid-1", "email": "a@b.c", "refreshToken": "r", "expiresIn": "3600"},
        )

    session = _provider(handler).sign_in("a@b.c", "pw")
    assert session.id_token == "tok"
    assert session.uid == "uid-1"
    assert session.expires_in == 3600
    assert seen[0].url.path == "/v1/accounts:signInWithPassword"
    assert seen[0].url.params["key"] == "web-key"
    assert json.loads(seen[0].content) == {"email": "a@b.c", "password": "pw", "returnSecureToken": True}


def test_bad_credentials_raise_authentication_failed():
    def handler(request):
        return httpx.Response(400, json={"error": {"message": "INVALID_LOGIN_CREDENTIALS"}})

    with pytest.raises(AuthenticationFailed, match="INVALID_LOGIN_CREDENTIALS"):
        _provider(handler).sign_in("a@b.c", "nope")


def test_server_errors_are_upstream_unavailable():
    with pytest.raises(UpstreamUnavailable):
        _provider(lambda request: httpx.Response(503)).sign_in("a@b.c", "pw")


def test_lookup_uid():
    def handler(request):
        assert request.url.path.endswith("accounts:lookup")
        return httpx.Response(200, json={"users": [{"localId": "uid-9"}]})

    assert _provider(handler).lookup_uid("tok") == "uid-9"


def test_lookup_without_users_is_rejected():
    with pytest.raises(AuthenticationFailed):
        _provider(lambda request: httpx.Response(200, json={})).lookup_uid("tok")


def test_in_memory_provider_round_trip():
    provider = InMemoryIdentityProvider()
    uid = provider.add_account("Admin@Example.com", "pw", uid="u-admin")
    session = provider.sign_in("admin@example.com", "pw")
    assert session.uid == uid
    assert provider.lookup_uid(session.id_token) == "u-admin"
    with pytest.raises(AuthenticationFailed):
        provider.sign_in("admin@example.com", "wrong")
    with pytest.raises(AuthenticationFailed):
        provider.lookup_uid("unknown")
