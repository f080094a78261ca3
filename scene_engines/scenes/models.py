"""Scene records as stored under ``Scenes/``."""
from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Stored field names, current first, then the legacy PascalCase spellings.
SCENE_FIELD_NAMES = frozenset(
    {
        "title",
        "scenetitle",
        "imageurl",
        "blobkey",
        "s3key",
        "lastupdate",
        "personincharge",
    }
)


class Scene(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    scene_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("sceneId", "SceneId", "scene_id"),
        serialization_alias="sceneId",
    )
    title: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("title", "SceneTitle", "sceneTitle"),
        serialization_alias="title",
    )
    image_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("imageUrl", "ImageUrl", "image_url"),
        serialization_alias="imageUrl",
    )
    blob_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("blobKey", "S3Key", "s3Key", "blob_key"),
        serialization_alias="blobKey",
    )
    last_update: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("lastUpdate", "LastUpdate", "last_update"),
        serialization_alias="lastUpdate",
    )
    person_in_charge: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("personInCharge", "PersonInCharge", "person_in_charge"),
        serialization_alias="personInCharge",
    )
    level: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("level", "Level"),
        serialization_alias="level",
    )
    building: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("building", "Building"),
        serialization_alias="building",
    )

    @field_validator("*", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, (int, float)):
            return str(value)
        return value


class SceneMetadataUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    scene_id: str = Field(alias="sceneId")
    building: str
    level: Optional[str] = None
    title: Optional[str] = None
    person_in_charge: Optional[str] = Field(default=None, alias="personInCharge")


class SceneImageReplace(BaseModel):
    """Form fields accompanying an image replace; the file travels separately."""

    scene_id: str
    building: str
    level: Optional[str] = None
    title: Optional[str] = None
    person_in_charge: Optional[str] = None
    old_blob_key: Optional[str] = None
    old_image_url: Optional[str] = None


class BlobUpload(BaseModel):
    filename: Optional[str] = None
    content_type: Optional[str] = None
    content: bytes = b""
