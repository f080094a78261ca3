"""Path-addressed document store abstractions."""
from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Optional, Protocol

from scene_engines.common.identity import SessionContext
from scene_engines.config import runtime_config

logger = logging.getLogger(__name__)


def split_path(path: str) -> List[str]:
    return [segment for segment in (path or "").strip("/").split("/") if segment]


class DocumentStore(Protocol):
    def get(self, ctx: SessionContext, path: str) -> Any:
        """Return the subtree or leaf at path, or None when absent."""
        ...

    def patch(self, ctx: SessionContext, path: str, fields: Dict[str, Any]) -> None:
        """Merge fields into the object at path; other children are untouched."""
        ...

    def put(self, ctx: SessionContext, path: str, value: Any) -> None:
        ...

    def delete(self, ctx: SessionContext, path: str) -> None:
        ...


class InMemoryDocumentStore:
    """Nested-dict store with the same merge semantics as the realtime database.

    A ``None`` value in ``put`` or ``patch`` removes the addressed child, and
    empty objects left behind are pruned, so reads never see ``{}`` nodes.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self._root: Dict[str, Any] = copy.deepcopy(data) if data else {}

    def get(self, ctx: SessionContext, path: str) -> Any:
        node: Any = self._root
        for segment in split_path(path):
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]
        return copy.deepcopy(node)

    def patch(self, ctx: SessionContext, path: str, fields: Dict[str, Any]) -> None:
        segments = split_path(path)
        node = self._ensure_object(segments)
        for key, value in fields.items():
            if value is None:
                node.pop(key, None)
            else:
                node[key] = copy.deepcopy(value)
        self._prune(segments)

    def put(self, ctx: SessionContext, path: str, value: Any) -> None:
        segments = split_path(path)
        if not segments:
            self._root = copy.deepcopy(value) if isinstance(value, dict) else {}
            return
        if value is None:
            self.delete(ctx, path)
            return
        parent = self._ensure_object(segments[:-1])
        parent[segments[-1]] = copy.deepcopy(value)

    def delete(self, ctx: SessionContext, path: str) -> None:
        segments = split_path(path)
        if not segments:
            self._root = {}
            return
        node: Any = self._root
        for segment in segments[:-1]:
            if not isinstance(node, dict) or segment not in node:
                return
            node = node[segment]
        if isinstance(node, dict):
            node.pop(segments[-1], None)
        self._prune(segments[:-1])

    def _ensure_object(self, segments: List[str]) -> Dict[str, Any]:
        node = self._root
        for segment in segments:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = {}
                node[segment] = child
            node = child
        return node

    def _prune(self, segments: List[str]) -> None:
        for depth in range(len(segments), 0, -1):
            parent: Any = self._root
            for segment in segments[: depth - 1]:
                parent = parent.get(segment) if isinstance(parent, dict) else None
            if not isinstance(parent, dict):
                return
            child = parent.get(segments[depth - 1])
            if isinstance(child, dict) and not child:
                parent.pop(segments[depth - 1], None)
            else:
                return


def document_store_from_env() -> DocumentStore:
    backend = runtime_config.get_document_store_backend()
    if backend == "memory":
        return InMemoryDocumentStore()
    from scene_engines.document_store.realtime_db import RealtimeDbDocumentStore

    return RealtimeDbDocumentStore()


_default_store: Optional[DocumentStore] = None


def get_document_store() -> DocumentStore:
    global _default_store
    if _default_store is None:
        _default_store = document_store_from_env()
        logger.info("document store backend: %s", type(_default_store).__name__)
    return _default_store


def set_document_store(store: Optional[DocumentStore]) -> None:
    global _default_store
    _default_store = store
