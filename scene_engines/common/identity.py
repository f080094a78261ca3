"""Per-request session context and the FastAPI dependency that builds it."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from fastapi import HTTPException, Request


@dataclass
class SessionContext:
    """Credential and caller identity threaded explicitly into every store call."""

    id_token: str
    user_id: Optional[str] = None
    email: Optional[str] = None
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        if not self.id_token:
            raise ValueError("id_token is required")
        if not self.request_id:
            raise ValueError("request_id is required")


class SessionContextBuilder:
    """Builder for SessionContext from HTTP headers."""

    @classmethod
    def from_request(cls, request: Request) -> SessionContext:
        headers = {key: value for key, value in request.headers.items()}
        return cls.from_headers(headers)

    @classmethod
    def from_headers(cls, headers: Dict[str, str]) -> SessionContext:
        normalized = {key.lower(): value for key, value in headers.items()}
        authorization = normalized.get("authorization") or ""
        if not authorization.lower().startswith("bearer "):
            raise ValueError("Authorization bearer token is required")
        token = authorization.split(" ", 1)[1].strip()
        if not token:
            raise ValueError("Authorization bearer token is required")
        return SessionContext(
            id_token=token,
            user_id=normalized.get("x-user-id") or None,
            email=normalized.get("x-user-email") or None,
            request_id=normalized.get("x-request-id") or uuid.uuid4().hex,
        )


def get_session_context(request: Request) -> SessionContext:
    try:
        return SessionContextBuilder.from_request(request)
    except ValueError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
