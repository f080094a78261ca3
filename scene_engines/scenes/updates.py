"""Partial merges against a single scene node."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from scene_engines.common.errors import UpstreamUnavailable
from scene_engines.common.identity import SessionContext
from scene_engines.document_store.repository import DocumentStore, get_document_store
from scene_engines.logging.audit import emit_audit_event
from scene_engines.scenes.models import Scene
from scene_engines.scenes.paths import InvalidSceneArgument, resolve_scene_path

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PartialUpdateService:
    """Every write is a PATCH of the named fields plus a fresh ``lastUpdate``.

    Fields that are not in the patch are never sent, so the store leaves them
    exactly as they were.
    """

    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._store = store
        self._clock = clock or _utc_now

    @property
    def store(self) -> DocumentStore:
        return self._store or get_document_store()

    def _stamp(self) -> str:
        return self._clock().astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)

    def _patch(self, ctx: SessionContext, path: str, patch: Dict[str, Any], action: str) -> bool:
        try:
            self.store.patch(ctx, path, patch)
        except UpstreamUnavailable as exc:
            logger.error("scene patch failed at %s: %s", path, exc)
            return False
        emit_audit_event(
            ctx,
            action=action,
            surface="scenes",
            metadata={"path": path, "fields": sorted(patch)},
        )
        return True

    def update_title_and_person(
        self,
        ctx: SessionContext,
        scene_id: str,
        building: str,
        level: Optional[str],
        title: Optional[str],
        person_in_charge: Optional[str],
    ) -> bool:
        path = resolve_scene_path(building, level, scene_id)
        patch = {
            "title": title or "",
            "personInCharge": person_in_charge or "",
            "lastUpdate": self._stamp(),
        }
        return self._patch(ctx, path, patch, action="scenes:update_metadata")

    def update_after_blob_replace(self, ctx: SessionContext, scene: Scene) -> bool:
        if not (scene.scene_id or "").strip() or not (scene.building or "").strip():
            raise InvalidSceneArgument("SceneId and Building are required.")
        scene.last_update = self._stamp()
        path = resolve_scene_path(scene.building, scene.level, scene.scene_id)
        patch = {
            "imageUrl": scene.image_url,
            "blobKey": scene.blob_key,
            "title": scene.title,
            "personInCharge": scene.person_in_charge,
            "lastUpdate": scene.last_update,
        }
        # A null in a PATCH deletes the child, so unset fields stay out.
        patch = {key: value for key, value in patch.items() if value is not None}
        return self._patch(ctx, path, patch, action="scenes:replace_image")
