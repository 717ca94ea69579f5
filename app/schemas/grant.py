"""Request/response schemas for menu grants."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class GrantRead(BaseModel):
    """One (user, menu) grant."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    user_id: uuid.UUID
    menu_id: uuid.UUID
    granted_by: uuid.UUID | None = None
    granted_at: datetime


class GrantCreate(BaseModel):
    """Grant a single user access to a single menu."""

    model_config = {"extra": "forbid"}

    user_id: uuid.UUID
    menu_id: uuid.UUID


class GrantSetRequest(BaseModel):
    """Desired full set of users with access to a menu. Duplicates are ignored."""

    model_config = {"extra": "forbid"}

    user_ids: list[uuid.UUID] = Field(default_factory=list, max_length=10000)


class GrantReconcileResponse(BaseModel):
    """Outcome of reconciling a menu's grants to a desired set."""

    menu_id: uuid.UUID
    granted: list[uuid.UUID] = Field(description="User ids that gained access.")
    revoked: list[uuid.UUID] = Field(description="User ids that lost access.")
    grants: list[GrantRead] = Field(description="Grants on the menu after reconciliation.")


class GrantsListResponse(BaseModel):
    """Response for grant listings."""

    grants: list[GrantRead]
