"""Request/response schemas for the menu catalog."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


def _validate_route(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("route must be non-empty")
    return value


class MenuRead(BaseModel):
    """Menu entry as returned by the API."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    name: str
    description: str | None = None
    icon: str
    route: str
    order_index: int
    is_active: bool
    created_by: uuid.UUID | None = None
    created_at: datetime
    updated_at: datetime


class MenuCreate(BaseModel):
    """New menu entry (admin only)."""

    model_config = {"extra": "forbid"}

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    icon: str = Field(default="Layout", min_length=1, max_length=64)
    route: str = Field(..., min_length=1, max_length=1024)
    order_index: int = Field(default=0, ge=0)
    is_active: bool = True

    check_route = field_validator("route")(_validate_route)


class MenuUpdate(BaseModel):
    """Partial menu update (admin only). Only fields that are present are applied."""

    model_config = {"extra": "forbid"}

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    icon: str | None = Field(default=None, min_length=1, max_length=64)
    route: str | None = Field(default=None, min_length=1, max_length=1024)
    order_index: int | None = Field(default=None, ge=0)
    is_active: bool | None = None

    @field_validator("route")
    @classmethod
    def validate_route(cls, v: str | None) -> str | None:
        return None if v is None else _validate_route(v)


class MenusListResponse(BaseModel):
    """Response for GET /menus and GET /me/menus, in display order."""

    menus: list[MenuRead]
