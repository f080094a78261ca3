from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    ADMIN = "Admin"
    STAFF = "Staff"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["Role"]:
        value = (raw or "").strip().lower()
        for role in cls:
            if role.value.lower() == value:
                return role
        return None


class IdentitySession(BaseModel):
    id_token: str
    uid: str
    email: str = ""
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None


class UserProfile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    uid: str
    name: str = ""
    email: str = ""
    phone: str = ""
    role: Role = Role.STAFF


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id_token: str = Field(serialization_alias="idToken")
    uid: str
    email: str
    role: Role
    expires_in: Optional[int] = Field(default=None, serialization_alias="expiresIn")
