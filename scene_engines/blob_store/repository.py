"""Blob store abstractions and key helpers."""
from __future__ import annotations

import logging
import mimetypes
from pathlib import PurePosixPath
from typing import Callable, Dict, Optional, Protocol, Tuple
from urllib.parse import quote, unquote, urlparse
from uuid import uuid4

from scene_engines.config import runtime_config

logger = logging.getLogger(__name__)

UNASSIGNED_SEGMENT = "Unassigned"
DEFAULT_EXTENSION = ".jpg"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class BlobStore(Protocol):
    def upload(self, key: str, content: bytes, content_type: str) -> str:
        """Store content under key and return its public URL."""
        ...

    def delete(self, key: str) -> None:
        """Delete key; a key that is already gone is not an error."""
        ...

    def presigned_download_url(self, key: str, filename: str, ttl_seconds: int) -> str:
        ...


def _norm_segment(value: Optional[str]) -> str:
    cleaned = (value or "").strip().strip("/").strip()
    return cleaned or UNASSIGNED_SEGMENT


def build_blob_key(
    building: Optional[str],
    level: Optional[str],
    original_filename: Optional[str],
    id_fn: Optional[Callable[[], str]] = None,
) -> str:
    """``{Building}/{Level}/{generated}{ext}``; the original name only lends its extension."""
    ext = PurePosixPath((original_filename or "").replace("\\", "/")).suffix
    if not ext:
        ext = DEFAULT_EXTENSION
    generated = (id_fn or (lambda: str(uuid4())))()
    return f"{_norm_segment(building)}/{_norm_segment(level)}/{generated}{ext}"


def guess_content_type(filename: Optional[str], declared: Optional[str] = None) -> str:
    if declared and declared.strip():
        return declared.strip()
    guessed, _ = mimetypes.guess_type(filename or "")
    return guessed or DEFAULT_CONTENT_TYPE


def key_from_url(url: Optional[str]) -> Optional[str]:
    """Recover the object key from a virtual-hosted or path-style public URL."""
    if not url or not url.strip():
        return None
    parsed = urlparse(url.strip())
    if not parsed.scheme or not parsed.netloc:
        return None
    key = unquote(parsed.path.lstrip("/"))
    return key or None


def public_base_url(bucket: str, region: Optional[str] = None) -> str:
    configured = runtime_config.get_blob_public_base_url()
    if configured:
        return configured
    if not region:
        return f"https://{bucket}.s3.amazonaws.com"
    return f"https://{bucket}.s3.{region}.amazonaws.com"


class InMemoryBlobStore:
    """Dict-backed blob store for tests and local runs."""

    def __init__(self, base_url: str = "https://blobs.local") -> None:
        self.base_url = base_url.rstrip("/")
        self.objects: Dict[str, Tuple[bytes, str]] = {}

    def upload(self, key: str, content: bytes, content_type: str) -> str:
        if not key or not key.strip():
            raise ValueError("Missing key.")
        if not content:
            raise ValueError("Empty content.")
        self.objects[key] = (bytes(content), content_type)
        return f"{self.base_url}/{key}"

    def delete(self, key: str) -> None:
        if not key or not key.strip():
            return
        if self.objects.pop(key, None) is None:
            logger.info("Delete ignored; key not found: %s", key)

    def presigned_download_url(self, key: str, filename: str, ttl_seconds: int) -> str:
        disposition = quote(f'attachment; filename="{filename}"', safe="")
        return f"{self.base_url}/{key}?response-content-disposition={disposition}&expires-in={ttl_seconds}"


def blob_store_from_env() -> BlobStore:
    backend = runtime_config.get_blob_store_backend()
    if backend == "memory":
        return InMemoryBlobStore()
    from scene_engines.blob_store.s3 import S3BlobStore

    return S3BlobStore()


_default_store: Optional[BlobStore] = None


def get_blob_store() -> Optional[BlobStore]:
    """Return the configured blob store, or None when none can be built."""
    global _default_store
    if _default_store is None:
        try:
            _default_store = blob_store_from_env()
        except (RuntimeError, ValueError) as exc:
            logger.warning("blob store unavailable: %s", exc)
            return None
    return _default_store


def set_blob_store(store: Optional[BlobStore]) -> None:
    global _default_store
    _default_store = store
