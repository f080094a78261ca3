"""FastAPI routes for the scene directory."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from scene_engines.common.error_envelope import error_response
from scene_engines.common.errors import UpstreamUnavailable
from scene_engines.common.identity import SessionContext, get_session_context
from scene_engines.identity.auth import require_admin
from scene_engines.scenes.models import BlobUpload, SceneImageReplace, SceneMetadataUpdate
from scene_engines.scenes.paths import InvalidSceneArgument
from scene_engines.scenes.service import BlobStoreNotConfigured, SceneDirectoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scenes", tags=["scenes"])
_service = SceneDirectoryService()


def get_scene_service() -> SceneDirectoryService:
    return _service


def _invalid(exc: InvalidSceneArgument) -> None:
    error_response("scenes.invalid_argument", str(exc), status_code=400, resource_kind="scene")


@router.get("")
def list_scenes(
    ctx: SessionContext = Depends(get_session_context),
    service: SceneDirectoryService = Depends(get_scene_service),
):
    return [scene.model_dump(by_alias=True) for scene in service.list_scenes(ctx)]


@router.get("/counts")
def scene_counts(
    ctx: SessionContext = Depends(get_session_context),
    service: SceneDirectoryService = Depends(get_scene_service),
):
    return service.scene_counts(ctx)


@router.get("/random-pictures")
def random_pictures(
    count: int = Query(4, ge=1, le=50),
    ctx: SessionContext = Depends(get_session_context),
    service: SceneDirectoryService = Depends(get_scene_service),
):
    return {"images": service.random_pictures(ctx, count=count)}


@router.patch("/metadata")
def update_metadata(
    req: SceneMetadataUpdate,
    ctx: SessionContext = Depends(require_admin),
    service: SceneDirectoryService = Depends(get_scene_service),
):
    try:
        ok = service.update_metadata(ctx, req)
    except InvalidSceneArgument as exc:
        _invalid(exc)
    if not ok:
        error_response(
            "scenes.update_failed",
            "Failed to update scene metadata.",
            status_code=502,
            resource_kind="scene",
            details={"sceneId": req.scene_id},
        )
    return {"success": True}


@router.post("/image")
async def replace_scene_image(
    image_file: Optional[UploadFile] = File(None, alias="imageFile"),
    scene_id: str = Form(..., alias="sceneId"),
    building: str = Form(...),
    level: Optional[str] = Form(None),
    title: Optional[str] = Form(None, alias="sceneTitle"),
    person_in_charge: Optional[str] = Form(None, alias="personInCharge"),
    old_blob_key: Optional[str] = Form(None, alias="oldBlobKey"),
    old_image_url: Optional[str] = Form(None, alias="oldImageUrl"),
    ctx: SessionContext = Depends(require_admin),
    service: SceneDirectoryService = Depends(get_scene_service),
):
    upload = None
    if image_file is not None:
        content = await image_file.read()
        if content:
            upload = BlobUpload(filename=image_file.filename, content_type=image_file.content_type, content=content)
    req = SceneImageReplace(
        scene_id=scene_id,
        building=building,
        level=level,
        title=title,
        person_in_charge=person_in_charge,
        old_blob_key=old_blob_key,
        old_image_url=old_image_url,
    )
    try:
        outcome = service.replace_scene_image(ctx, req, upload)
    except InvalidSceneArgument as exc:
        _invalid(exc)
    except BlobStoreNotConfigured as exc:
        error_response("scenes.blob_store_missing", str(exc), status_code=501, resource_kind="blob")
    if not outcome.ok:
        logger.error("image replace failed for scene %s: %s", scene_id, outcome.error)
        error_response("scenes.replace_failed", outcome.error or "Failed to replace scene image.", status_code=502, resource_kind="scene")
    return {
        "success": True,
        "status": outcome.status.value,
        "imageUrl": outcome.data.get("image_url"),
        "blobKey": outcome.data.get("blob_key"),
        "warnings": outcome.warnings,
    }


@router.get("/download-url")
def download_url(
    key: str = Query(""),
    ctx: SessionContext = Depends(get_session_context),
    service: SceneDirectoryService = Depends(get_scene_service),
):
    try:
        url = service.download_url(key)
    except InvalidSceneArgument as exc:
        _invalid(exc)
    except BlobStoreNotConfigured as exc:
        error_response("scenes.blob_store_missing", str(exc), status_code=501, resource_kind="blob")
    except UpstreamUnavailable as exc:
        logger.error("download url failed for key %s: %s", key, exc)
        error_response("scenes.download_url_failed", "Failed to generate download URL.", status_code=502, resource_kind="blob")
    return {"url": url}
