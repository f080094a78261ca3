"""Flatten the raw ``Scenes`` subtree into Scene records.

Shape: building -> level -> scene_id -> leaf record. A node of the wrong shape
is skipped at the smallest enclosing unit, so one bad scene never hides its
siblings and one bad level never hides the rest of its building.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from pydantic import ValidationError

from scene_engines.scenes.models import SCENE_FIELD_NAMES, Scene

logger = logging.getLogger(__name__)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def _looks_like_scene(node: dict) -> bool:
    """A level-position object that is itself a scene record (flat placement).

    Any object child means the node is a level, and stray scalars beside the
    scenes are skipped one by one.
    """
    if any(isinstance(value, dict) for value in node.values()):
        return False
    return any(
        isinstance(key, str) and key.lower() in SCENE_FIELD_NAMES and _is_scalar(value)
        for key, value in node.items()
    )


def _parse_scene(leaf: Any, scene_id: str, building: str, level: Optional[str]) -> Optional[Scene]:
    match leaf:
        case dict():
            try:
                scene = Scene.model_validate(leaf)
            except ValidationError:
                logger.debug("skipping malformed scene %s/%s/%s", building, level, scene_id)
                return None
        case _:
            return None
    scene.scene_id = scene_id
    scene.building = building
    scene.level = level
    return scene


def _load_level(building: str, level_name: str, node: Any) -> List[Scene]:
    match node:
        case dict() if _looks_like_scene(node):
            scene = _parse_scene(node, scene_id=level_name, building=building, level=None)
            return [scene] if scene else []
        case dict():
            scenes: List[Scene] = []
            for scene_id, leaf in node.items():
                scene = _parse_scene(leaf, scene_id=scene_id, building=building, level=level_name)
                if scene:
                    scenes.append(scene)
            return scenes
        case _:
            return []


def _load_building(building: str, node: Any) -> List[Scene]:
    match node:
        case dict():
            scenes: List[Scene] = []
            for level_name, level_node in node.items():
                scenes.extend(_load_level(building, level_name, level_node))
            return scenes
        case _:
            return []


def load_all(raw_tree: Any) -> List[Scene]:
    match raw_tree:
        case dict():
            scenes: List[Scene] = []
            for building, node in raw_tree.items():
                scenes.extend(_load_building(building, node))
            return scenes
        case _:
            return []
