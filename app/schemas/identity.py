"""Schemas for identity-provider webhook events."""

import uuid
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from app.schemas.profile import ProfileRead, _validate_email


class SignupEvent(BaseModel):
    """A new identity reported by the provider. Metadata may override full_name and role."""

    model_config = {"extra": "ignore"}

    id: uuid.UUID
    email: str = Field(..., min_length=3, max_length=320)
    user_metadata: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("user_metadata", "raw_user_meta_data"),
        description="Provider-side metadata; recognised keys are full_name and role.",
    )

    check_email = field_validator("email")(_validate_email)

    @field_validator("user_metadata", mode="before")
    @classmethod
    def null_metadata_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v


class SignupResponse(BaseModel):
    """Profile synthesized for the new identity."""

    identity_id: uuid.UUID
    profile: ProfileRead


class IdentityRemovedResponse(BaseModel):
    """Result of an identity removal event."""

    identity_id: uuid.UUID
    removed: bool
