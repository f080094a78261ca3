"""Health and config probes."""
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter
from pydantic import BaseModel, Field

from scene_engines.config import runtime_config

router = APIRouter(tags=["system"])


class HealthStatus(BaseModel):
    status: str
    version: str = "0.1.0"
    time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


@router.get("/health", response_model=HealthStatus)
def health_check():
    return HealthStatus(status="ok")


@router.get("/configz")
def config_check() -> Dict[str, bool]:
    # Presence flags only; never echo values.
    cfg = runtime_config.config_snapshot()
    return {
        "has_database_url": bool(cfg["database_url"]),
        "has_identity_api_key": bool(cfg["identity_api_key"]),
        "has_blob_bucket": bool(cfg["blob_bucket"]),
        "blob_store_in_memory": cfg["blob_store_backend"] == "memory",
        "document_store_in_memory": cfg["document_store_backend"] == "memory",
    }
