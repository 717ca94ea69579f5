"""Mapper event hooks: profile creation on signup and updated_at maintenance."""

import logging
from typing import Any

from sqlalchemy import event

from app.models.base import utcnow
from app.models.identity import Identity
from app.models.menu import Menu
from app.models.profile import DEFAULT_FULL_NAME, DEFAULT_ROLE, Profile

logger = logging.getLogger(__name__)


def _metadata_text(metadata: dict[str, Any] | None, key: str) -> str | None:
    if not metadata:
        return None
    value = metadata.get(key)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def signup_profile_values(identity: Identity) -> dict[str, Any]:
    """
    Column values for the Profile created when an identity signs up.

    full_name and role come from the identity's metadata when present,
    otherwise "User" and "user". The profile starts active.
    """
    metadata = identity.raw_user_meta_data
    now = utcnow()
    return {
        "id": identity.id,
        "email": identity.email,
        "full_name": _metadata_text(metadata, "full_name") or DEFAULT_FULL_NAME,
        "role": _metadata_text(metadata, "role") or DEFAULT_ROLE,
        "is_active": True,
        "created_at": now,
        "updated_at": now,
    }


@event.listens_for(Identity, "after_insert")
def create_profile_on_signup(mapper, connection, target: Identity) -> None:
    """Insert exactly one Profile in the same transaction as the new Identity."""
    values = signup_profile_values(target)
    connection.execute(Profile.__table__.insert().values(**values))
    logger.info(
        "Profile created on signup",
        extra={"identity_id": str(target.id), "role": values["role"]},
    )


def touch_updated_at(mapper, connection, target: Any) -> None:
    """Overwrite updated_at with the current time, discarding any caller-supplied value."""
    target.updated_at = utcnow()


event.listen(Profile, "before_update", touch_updated_at)
event.listen(Menu, "before_update", touch_updated_at)
