"""Request/response schemas for the activity (audit) log."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ActivityLogRead(BaseModel):
    """Audit entry as returned by the API."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    user_id: uuid.UUID | None = None
    action: str
    entity_type: str
    entity_id: uuid.UUID | None = None
    details: dict[str, Any] | None = None
    ip_address: str | None = None
    created_at: datetime


class ActivityLogCreate(BaseModel):
    """
    Client-submitted audit entry. user_id may be omitted; when sent it must be the caller's id.
    ip_address is taken from the request, never from the body.
    """

    model_config = {"extra": "forbid"}

    user_id: uuid.UUID | None = None
    action: str = Field(..., min_length=1, max_length=128)
    entity_type: str = Field(..., min_length=1, max_length=64)
    entity_id: uuid.UUID | None = None
    details: dict[str, Any] | None = None


class ActivityLogsListResponse(BaseModel):
    """Page of audit entries, newest first."""

    items: list[ActivityLogRead]
    total: int = Field(description="Entries visible to the caller across all pages.")
    limit: int
    offset: int
