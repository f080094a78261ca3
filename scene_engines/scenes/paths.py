"""Canonical document paths for scene nodes.

Nested: ``Scenes/{building}/{level}/{scene_id}``
  Flat: ``Scenes/{building}/{scene_id}`` when level is empty or ``NA``.
"""
from __future__ import annotations

from typing import Optional

SCENES_ROOT = "Scenes"
FLAT_LEVEL_MARKER = "NA"


class InvalidSceneArgument(ValueError):
    """A required scene identifier is missing."""


def _clean(value: Optional[str], strip_slashes: bool) -> str:
    cleaned = (value or "").strip()
    if strip_slashes:
        cleaned = cleaned.strip("/").strip()
    return cleaned


def is_flat_level(level: Optional[str]) -> bool:
    cleaned = _clean(level, strip_slashes=True)
    return not cleaned or cleaned.upper() == FLAT_LEVEL_MARKER


def resolve_scene_path(building: Optional[str], level: Optional[str], scene_id: Optional[str]) -> str:
    b = _clean(building, strip_slashes=True)
    lvl = _clean(level, strip_slashes=True)
    sid = _clean(scene_id, strip_slashes=False)
    if not b or not sid:
        raise InvalidSceneArgument("Building and SceneId are required.")
    if is_flat_level(lvl):
        return f"{SCENES_ROOT}/{b}/{sid}"
    return f"{SCENES_ROOT}/{b}/{lvl}/{sid}"
