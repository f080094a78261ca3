"""Auth dependencies and the binary admin/staff gate."""
from __future__ import annotations

import logging

from fastapi import Depends

from scene_engines.common.error_envelope import error_response
from scene_engines.common.errors import MalformedDocument, UpstreamUnavailable
from scene_engines.common.identity import SessionContext, get_session_context
from scene_engines.identity.models import Role
from scene_engines.identity.provider import AuthenticationFailed, IdentityProvider, get_identity_provider
from scene_engines.identity.users import UserDirectory

logger = logging.getLogger(__name__)

_user_directory = UserDirectory()


def get_user_directory() -> UserDirectory:
    return _user_directory


def get_provider() -> IdentityProvider:
    try:
        return get_identity_provider()
    except ValueError as exc:
        logger.error("identity provider not configured: %s", exc)
        error_response(
            "auth.provider_unavailable",
            "Identity provider is not configured.",
            status_code=503,
            resource_kind="session",
        )


def require_admin(
    ctx: SessionContext = Depends(get_session_context),
    provider: IdentityProvider = Depends(get_provider),
    users: UserDirectory = Depends(get_user_directory),
) -> SessionContext:
    # The uid comes from the token, never from a client-supplied header.
    try:
        uid = provider.lookup_uid(ctx.id_token)
    except AuthenticationFailed as exc:
        error_response("auth.invalid_token", str(exc), status_code=401, resource_kind="session")
    except UpstreamUnavailable as exc:
        error_response("auth.provider_unavailable", str(exc), status_code=503, resource_kind="session")
    ctx.user_id = uid
    try:
        role = users.get_role(ctx, uid)
    except (UpstreamUnavailable, MalformedDocument) as exc:
        error_response("auth.role_unavailable", str(exc), status_code=503, resource_kind="user")
    if role is not Role.ADMIN:
        error_response("auth.admin_required", "Admin role required.", status_code=403, resource_kind="user")
    return ctx
