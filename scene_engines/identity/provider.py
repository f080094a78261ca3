"""Email/password identity provider adapters."""
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional, Protocol, Tuple

import httpx

from scene_engines.common.errors import UpstreamUnavailable
from scene_engines.config import runtime_config
from scene_engines.identity.models import IdentitySession

logger = logging.getLogger(__name__)


class AuthenticationFailed(Exception):
    """Credentials or token rejected by the identity provider."""


class IdentityProvider(Protocol):
    def sign_in(self, email: str, password: str) -> IdentitySession:
        ...

    def lookup_uid(self, id_token: str) -> str:
        """Return the uid a live token belongs to."""
        ...


class IdentityToolkitProvider:
    """Identity Toolkit REST (``accounts:signInWithPassword`` / ``accounts:lookup``)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.api_key = api_key or runtime_config.get_identity_api_key()
        if not self.api_key:
            raise ValueError("IDENTITY_API_KEY config missing.")
        self.base_url = (base_url or runtime_config.get_identity_base_url()).rstrip("/")
        self._timeout = timeout or runtime_config.get_upstream_timeout_seconds()
        self._client = client or httpx.Client(timeout=self._timeout)

    def _post(self, action: str, body: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/accounts:{action}"
        try:
            resp = self._client.post(url, params={"key": self.api_key}, json=body, timeout=self._timeout)
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailable(f"identity {action} timed out") from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable(f"identity {action} failed: {exc}") from exc
        if resp.status_code == 400:
            # Identity Toolkit reports bad credentials and bad tokens as 400.
            try:
                message = resp.json().get("error", {}).get("message", "INVALID_LOGIN")
            except ValueError:
                message = "INVALID_LOGIN"
            raise AuthenticationFailed(message)
        if resp.status_code >= 400:
            raise UpstreamUnavailable(f"identity {action} answered {resp.status_code}", status_code=resp.status_code)
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamUnavailable(f"identity {action} returned non-JSON body") from exc

    def sign_in(self, email: str, password: str) -> IdentitySession:
        data = self._post(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        token = data.get("idToken")
        uid = data.get("localId")
        if not token or not uid:
            raise AuthenticationFailed("identity provider returned no token")
        expires_in = data.get("expiresIn")
        return IdentitySession(
            id_token=token,
            uid=uid,
            email=data.get("email") or email,
            refresh_token=data.get("refreshToken"),
            expires_in=int(expires_in) if str(expires_in or "").isdigit() else None,
        )

    def lookup_uid(self, id_token: str) -> str:
        data = self._post("lookup", {"idToken": id_token})
        users = data.get("users") or []
        uid = users[0].get("localId") if users and isinstance(users[0], dict) else None
        if not uid:
            raise AuthenticationFailed("token does not resolve to a user")
        return uid


class InMemoryIdentityProvider:
    """Account table held in memory, for tests and local runs."""

    def __init__(self) -> None:
        self._accounts: Dict[str, Tuple[str, str]] = {}
        self._tokens: Dict[str, str] = {}

    def add_account(self, email: str, password: str, uid: Optional[str] = None) -> str:
        uid = uid or uuid.uuid4().hex
        self._accounts[email.lower()] = (password, uid)
        return uid

    def issue_token(self, uid: str) -> str:
        token = uuid.uuid4().hex
        self._tokens[token] = uid
        return token

    def sign_in(self, email: str, password: str) -> IdentitySession:
        account = self._accounts.get((email or "").lower())
        if not account or account[0] != password:
            raise AuthenticationFailed("INVALID_LOGIN_CREDENTIALS")
        uid = account[1]
        return IdentitySession(id_token=self.issue_token(uid), uid=uid, email=email, expires_in=3600)

    def lookup_uid(self, id_token: str) -> str:
        uid = self._tokens.get(id_token)
        if not uid:
            raise AuthenticationFailed("INVALID_ID_TOKEN")
        return uid


_default_provider: Optional[IdentityProvider] = None


def get_identity_provider() -> IdentityProvider:
    global _default_provider
    if _default_provider is None:
        _default_provider = IdentityToolkitProvider()
    return _default_provider


def set_identity_provider(provider: Optional[IdentityProvider]) -> None:
    global _default_provider
    _default_provider = provider
