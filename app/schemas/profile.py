"""Request/response schemas for profiles."""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

Role = Literal["admin", "user", "employee"]


def _validate_email(value: str) -> str:
    """Minimal shape check; the identity provider owns real address verification."""
    value = value.strip()
    local, sep, domain = value.partition("@")
    if not sep or not local or "." not in domain:
        raise ValueError(f"email must look like name@domain, got {value!r}")
    return value


def _validate_full_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("full_name must be non-empty")
    return value


class ProfileRead(BaseModel):
    """Profile as returned by the API."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    email: str
    full_name: str
    role: Role
    is_active: bool
    avatar_url: str | None = None
    created_at: datetime
    updated_at: datetime


class ProfileCreate(BaseModel):
    """Admin provisioning of a profile for an identity that has none."""

    model_config = {"extra": "forbid"}

    id: uuid.UUID = Field(..., description="Identity id issued by the identity provider.")
    email: str = Field(..., min_length=3, max_length=320)
    full_name: str = Field(..., min_length=1, max_length=255)
    role: Role = "user"
    is_active: bool = True
    avatar_url: str | None = Field(default=None, max_length=2048)

    check_email = field_validator("email")(_validate_email)
    check_full_name = field_validator("full_name")(_validate_full_name)


class ProfileUpdate(BaseModel):
    """
    Partial profile update. Only fields that are present are applied.

    role and is_active may only be changed by an active admin; a self-update that
    sends them must send the currently stored values.
    """

    model_config = {"extra": "forbid"}

    email: str | None = Field(default=None, min_length=3, max_length=320)
    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    avatar_url: str | None = Field(default=None, max_length=2048)
    role: Role | None = None
    is_active: bool | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return None if v is None else _validate_email(v)

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str | None) -> str | None:
        return None if v is None else _validate_full_name(v)


class ProfilesListResponse(BaseModel):
    """Response for GET /profiles."""

    profiles: list[ProfileRead]
