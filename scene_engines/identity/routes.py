"""FastAPI routes for sign-in."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from scene_engines.common.error_envelope import error_response
from scene_engines.common.errors import MalformedDocument, UpstreamUnavailable
from scene_engines.common.identity import SessionContext
from scene_engines.identity.auth import get_provider, get_user_directory
from scene_engines.identity.models import LoginRequest, LoginResponse, Role
from scene_engines.identity.provider import AuthenticationFailed, IdentityProvider
from scene_engines.identity.users import UserDirectory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
def login(
    req: LoginRequest,
    provider: IdentityProvider = Depends(get_provider),
    users: UserDirectory = Depends(get_user_directory),
):
    try:
        session = provider.sign_in(req.email.strip(), req.password)
    except AuthenticationFailed:
        error_response("auth.invalid_credentials", "Invalid email or password.", status_code=401, resource_kind="session")
    except UpstreamUnavailable as exc:
        logger.error("identity provider unavailable during login: %s", exc)
        error_response("auth.provider_unavailable", "Identity provider unavailable.", status_code=503, resource_kind="session")

    ctx = SessionContext(id_token=session.id_token, user_id=session.uid, email=session.email)
    try:
        role = users.get_role(ctx, session.uid)
    except (UpstreamUnavailable, MalformedDocument) as exc:
        logger.warning("role lookup failed for %s, defaulting to staff: %s", session.uid, exc)
        role = Role.STAFF
    return LoginResponse(
        id_token=session.id_token,
        uid=session.uid,
        email=session.email,
        role=role,
        expires_in=session.expires_in,
    ).model_dump(by_alias=True, mode="json")
