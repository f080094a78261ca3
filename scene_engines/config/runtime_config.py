"""Runtime configuration helpers for the scene engines."""
from __future__ import annotations

import os
from typing import List, Optional

DEFAULT_UPSTREAM_TIMEOUT_SECONDS = 10.0
DEFAULT_PRESIGN_TTL_SECONDS = 600
DEFAULT_IDENTITY_BASE_URL = "https://identitytoolkit.googleapis.com/v1"
DEFAULT_FALLBACK_IMAGES = [
    "/uploads/sample1.jpg",
    "/uploads/sample2.jpg",
    "/uploads/sample3.jpg",
    "/uploads/sample4.jpg",
    "/uploads/sample5.jpg",
]


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, default)


def get_env() -> Optional[str]:
    return _get_env("ENV") or _get_env("APP_ENV")


def get_database_url() -> Optional[str]:
    value = _get_env("DATABASE_URL") or _get_env("FIREBASE_DATABASE_URL")
    return value.rstrip("/") if value else None


def get_identity_api_key() -> Optional[str]:
    return _get_env("IDENTITY_API_KEY") or _get_env("FIREBASE_WEB_API_KEY")


def get_identity_base_url() -> str:
    return (_get_env("IDENTITY_BASE_URL") or DEFAULT_IDENTITY_BASE_URL).rstrip("/")


def get_blob_bucket() -> Optional[str]:
    return _get_env("BLOB_BUCKET") or _get_env("AWS_BUCKET_NAME")


def get_blob_region() -> Optional[str]:
    return _get_env("BLOB_REGION") or _get_env("AWS_REGION") or _get_env("AWS_DEFAULT_REGION")


def get_blob_public_base_url() -> Optional[str]:
    value = _get_env("BLOB_PUBLIC_BASE_URL")
    return value.rstrip("/") if value else None


def get_document_store_backend() -> str:
    return (_get_env("DOCUMENT_STORE_BACKEND") or "realtime_db").lower()


def get_blob_store_backend() -> str:
    return (_get_env("BLOB_STORE_BACKEND") or "s3").lower()


def get_upstream_timeout_seconds() -> float:
    raw = _get_env("UPSTREAM_TIMEOUT_SECONDS")
    if not raw:
        return DEFAULT_UPSTREAM_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_UPSTREAM_TIMEOUT_SECONDS
    return value if value > 0 else DEFAULT_UPSTREAM_TIMEOUT_SECONDS


def get_presign_ttl_seconds() -> int:
    raw = _get_env("PRESIGN_TTL_SECONDS")
    if not raw:
        return DEFAULT_PRESIGN_TTL_SECONDS
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_PRESIGN_TTL_SECONDS
    return value if value > 0 else DEFAULT_PRESIGN_TTL_SECONDS


def get_fallback_images() -> List[str]:
    raw = _get_env("FALLBACK_IMAGES")
    if not raw:
        return list(DEFAULT_FALLBACK_IMAGES)
    images = [part.strip() for part in raw.split(",") if part.strip()]
    return images or list(DEFAULT_FALLBACK_IMAGES)


def config_snapshot() -> dict:
    """Return a snapshot of relevant env-driven config."""
    return {
        "env": get_env(),
        "database_url": get_database_url(),
        "identity_api_key": get_identity_api_key(),
        "identity_base_url": get_identity_base_url(),
        "blob_bucket": get_blob_bucket(),
        "blob_region": get_blob_region(),
        "blob_public_base_url": get_blob_public_base_url(),
        "document_store_backend": get_document_store_backend(),
        "blob_store_backend": get_blob_store_backend(),
        "upstream_timeout_seconds": get_upstream_timeout_seconds(),
        "presign_ttl_seconds": get_presign_ttl_seconds(),
    }
