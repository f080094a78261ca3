"""User profiles stored under ``users/{uid}``."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from scene_engines.common.errors import MalformedDocument, UpstreamUnavailable
from scene_engines.common.identity import SessionContext
from scene_engines.document_store.repository import DocumentStore, get_document_store
from scene_engines.identity.models import Role, UserProfile

logger = logging.getLogger(__name__)

USERS_ROOT = "users"


def _role_of(record: Any) -> Optional[Role]:
    if not isinstance(record, dict):
        return None
    raw = record.get("role")
    if raw is None:
        raw = record.get("Role")
    return Role.parse(raw if isinstance(raw, str) else None)


class UserDirectory:
    def __init__(self, store: Optional[DocumentStore] = None) -> None:
        self._store = store

    @property
    def store(self) -> DocumentStore:
        return self._store or get_document_store()

    def get_profile(self, ctx: SessionContext, uid: str) -> Optional[UserProfile]:
        """Read one profile; raises UpstreamUnavailable so callers can tell absent from unreachable."""
        record = self.store.get(ctx, f"{USERS_ROOT}/{uid}")
        if not isinstance(record, dict):
            return None
        return UserProfile(
            uid=uid,
            name=str(record.get("name") or ""),
            email=str(record.get("email") or ""),
            phone=str(record.get("phone") or ""),
            role=_role_of(record) or Role.STAFF,
        )

    def get_role(self, ctx: SessionContext, uid: str) -> Role:
        profile = self.get_profile(ctx, uid)
        return profile.role if profile else Role.STAFF

    def role_counts(self, ctx: SessionContext) -> Dict[str, int]:
        counts = {"admin": 0, "staff": 0}
        try:
            users = self.store.get(ctx, USERS_ROOT)
        except (UpstreamUnavailable, MalformedDocument) as exc:
            logger.warning("user role counts degraded to zero: %s", exc)
            return counts
        if not isinstance(users, dict):
            return counts
        for record in users.values():
            role = _role_of(record)
            if role is Role.ADMIN:
                counts["admin"] += 1
            elif role is Role.STAFF:
                counts["staff"] += 1
        return counts
