"""Request-scoped caller context used by the policy layer."""

import uuid

from pydantic import BaseModel

from app.models.profile import ADMIN_ROLE


class AccessContext(BaseModel):
    """
    Caller identity plus the role and activation state loaded once per request.

    role and is_active are None/False when the identity has no profile, so every
    admin check evaluates to False rather than failing.
    """

    model_config = {"frozen": True}

    user_id: uuid.UUID
    role: str | None = None
    is_active: bool = False
    has_profile: bool = False

    @property
    def is_admin(self) -> bool:
        return self.has_profile and self.is_active and self.role == ADMIN_ROLE
