"""Audit helper for emitting records of scene and account mutations."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, Field

from scene_engines.common.identity import SessionContext

logger = logging.getLogger(__name__)
_audit_log = logging.getLogger("scene_engines.audit")


class AuditEvent(BaseModel):
    action: str
    surface: str = "audit"
    actor_type: str
    user_id: Optional[str] = None
    request_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: Dict[str, Any] = Field(default_factory=dict)


AuditLogger = Callable[[AuditEvent], None]


def log_audit_event(event: AuditEvent) -> None:
    _audit_log.info("%s", event.model_dump_json())


_audit_logger: AuditLogger = log_audit_event


def set_audit_logger(audit_logger: Optional[AuditLogger]) -> None:
    global _audit_logger
    _audit_logger = audit_logger or log_audit_event


def emit_audit_event(
    ctx: SessionContext,
    action: str,
    surface: str = "audit",
    metadata: Optional[Dict[str, Any]] = None,
) -> None:
    event = AuditEvent(
        action=action,
        surface=surface,
        actor_type="human" if ctx.user_id else "system",
        user_id=ctx.user_id,
        request_id=ctx.request_id,
        metadata=dict(metadata or {}),
    )
    try:
        _audit_logger(event)
    except Exception as exc:
        # Audit persistence never blocks the mutation it describes.
        logger.warning("audit persistence failed for %s: %s", action, exc)
