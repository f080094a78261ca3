"""Service layer for the scene directory: reads, sampling and image replace."""
from __future__ import annotations

import logging
import random
from pathlib import PurePosixPath
from typing import Any, Callable, Dict, List, Optional

from scene_engines.blob_store.repository import (
    BlobStore,
    build_blob_key,
    get_blob_store,
    guess_content_type,
    key_from_url,
)
from scene_engines.common.errors import MalformedDocument, UpstreamUnavailable
from scene_engines.common.identity import SessionContext
from scene_engines.common.outcome import Outcome
from scene_engines.config import runtime_config
from scene_engines.document_store.repository import DocumentStore, get_document_store
from scene_engines.scenes.image_urls import collect_image_urls
from scene_engines.scenes.models import BlobUpload, Scene, SceneImageReplace, SceneMetadataUpdate
from scene_engines.scenes.paths import FLAT_LEVEL_MARKER, SCENES_ROOT, InvalidSceneArgument
from scene_engines.scenes.tree import load_all
from scene_engines.scenes.updates import PartialUpdateService

logger = logging.getLogger(__name__)


class BlobStoreNotConfigured(RuntimeError):
    """Raised when an operation needs the blob store and none is configured."""


class SceneDirectoryService:
    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        blob_store: Optional[BlobStore] = None,
        updates: Optional[PartialUpdateService] = None,
        id_fn: Optional[Callable[[], str]] = None,
        fallback_images: Optional[List[str]] = None,
    ) -> None:
        self._store = store
        self._blob_store = blob_store
        self._updates = updates or PartialUpdateService(store=store)
        self._id_fn = id_fn
        self._fallback_images = fallback_images

    @property
    def store(self) -> DocumentStore:
        return self._store or get_document_store()

    @property
    def blob_store(self) -> Optional[BlobStore]:
        return self._blob_store or get_blob_store()

    def _require_blob_store(self) -> BlobStore:
        blob_store = self.blob_store
        if blob_store is None:
            raise BlobStoreNotConfigured("Blob store is not configured on the server.")
        return blob_store

    def _read_scenes_tree(self, ctx: SessionContext) -> Any:
        try:
            return self.store.get(ctx, SCENES_ROOT)
        except (UpstreamUnavailable, MalformedDocument) as exc:
            logger.warning("scene tree read degraded to empty: %s", exc)
            return None

    # --- reads ---

    def list_scenes(self, ctx: SessionContext) -> List[Scene]:
        return load_all(self._read_scenes_tree(ctx))

    def scene_counts(self, ctx: SessionContext) -> Dict[str, Any]:
        buildings: Dict[str, Dict[str, Any]] = {}
        scenes = self.list_scenes(ctx)
        for scene in scenes:
            entry = buildings.setdefault(scene.building or "", {"total": 0, "levels": {}})
            level = scene.level or FLAT_LEVEL_MARKER
            entry["levels"][level] = entry["levels"].get(level, 0) + 1
            entry["total"] += 1
        return {"total": len(scenes), "buildings": buildings}

    def random_pictures(self, ctx: SessionContext, count: int = 4, rng: Optional[random.Random] = None) -> List[str]:
        rng = rng or random.Random()
        urls = list(dict.fromkeys(collect_image_urls(self._read_scenes_tree(ctx))))
        if not urls:
            pool = list(self._fallback_images or runtime_config.get_fallback_images())
            rng.shuffle(pool)
            return pool[: max(0, count)]
        rng.shuffle(urls)
        return urls[: max(1, count)]

    def download_url(self, key: str, ttl_seconds: Optional[int] = None) -> str:
        if not key or not key.strip():
            raise InvalidSceneArgument("Missing key.")
        blob_store = self._require_blob_store()
        filename = PurePosixPath(key.strip()).name
        ttl = ttl_seconds or runtime_config.get_presign_ttl_seconds()
        return blob_store.presigned_download_url(key.strip(), filename, ttl)

    # --- writes ---

    def update_metadata(self, ctx: SessionContext, req: SceneMetadataUpdate) -> bool:
        return self._updates.update_title_and_person(
            ctx,
            scene_id=req.scene_id,
            building=req.building,
            level=req.level,
            title=req.title,
            person_in_charge=req.person_in_charge,
        )

    def replace_scene_image(
        self,
        ctx: SessionContext,
        req: SceneImageReplace,
        upload: Optional[BlobUpload] = None,
    ) -> Outcome:
        """Upload, patch, then drop the old blob.

        The node is re-pointed before the old blob goes away, so a completed
        replace never leaves the node referencing a deleted object. Upload
        failure is fatal; a failed patch or old-blob delete is logged and
        reported as a warning on the outcome.
        """
        if not upload or not upload.content:
            ok = self._updates.update_title_and_person(
                ctx,
                scene_id=req.scene_id,
                building=req.building,
                level=req.level,
                title=req.title,
                person_in_charge=req.person_in_charge,
            )
            if not ok:
                return Outcome.failed("Failed to update scene metadata.")
            return Outcome.succeeded(image_url=None, blob_key=None)

        # Validate identifiers before touching the blob store.
        if not (req.scene_id or "").strip() or not (req.building or "").strip():
            raise InvalidSceneArgument("SceneId and Building are required.")

        blob_store = self._require_blob_store()
        new_key = build_blob_key(req.building, req.level, upload.filename, id_fn=self._id_fn)
        content_type = guess_content_type(upload.filename, upload.content_type)
        try:
            new_url = blob_store.upload(new_key, upload.content, content_type)
        except (UpstreamUnavailable, ValueError) as exc:
            logger.error("blob upload failed for scene %s: %s", req.scene_id, exc)
            return Outcome.failed("Blob upload failed.")
        logger.info("uploaded scene image %s for scene %s", new_key, req.scene_id)

        outcome = Outcome.succeeded(image_url=new_url, blob_key=new_key)
        scene = Scene(
            scene_id=req.scene_id,
            building=req.building,
            level=req.level,
            title=req.title,
            person_in_charge=req.person_in_charge,
            image_url=new_url,
            blob_key=new_key,
        )
        if not self._updates.update_after_blob_replace(ctx, scene):
            logger.warning(
                "metadata update failed for scene %s at %s/%s; new blob %s is unreferenced",
                req.scene_id,
                req.building,
                req.level,
                new_key,
            )
            outcome.add_warning(f"Metadata update failed; new blob {new_key} is unreferenced.")
            return outcome

        old_key = (req.old_blob_key or "").strip() or key_from_url(req.old_image_url)
        if old_key and old_key != new_key:
            try:
                blob_store.delete(old_key)
            except UpstreamUnavailable as exc:
                logger.warning("Failed to delete old blob %s: %s", old_key, exc)
                outcome.add_warning(f"Failed to delete old blob {old_key}.")
        return outcome
