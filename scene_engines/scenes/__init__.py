"""Scene directory package."""

from scene_engines.scenes.models import BlobUpload, Scene, SceneImageReplace, SceneMetadataUpdate
from scene_engines.scenes.paths import InvalidSceneArgument, resolve_scene_path
from scene_engines.scenes.service import BlobStoreNotConfigured, SceneDirectoryService

__all__ = [
    "Scene",
    "SceneMetadataUpdate",
    "SceneImageReplace",
    "BlobUpload",
    "InvalidSceneArgument",
    "resolve_scene_path",
    "SceneDirectoryService",
    "BlobStoreNotConfigured",
]
