"""Identity-provider events: signup (creates identity and, via hook, its profile) and removal."""

import logging
import uuid

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Identity, Profile
from app.models.profile import PROFILE_ROLES
from app.schemas.identity import SignupEvent
from app.services.errors import ValidationFailedError, translate_integrity_error

logger = logging.getLogger(__name__)


def _validate_metadata_role(event: SignupEvent) -> None:
    role = event.user_metadata.get("role")
    if role is None or (isinstance(role, str) and not role.strip()):
        return
    if not isinstance(role, str) or role.strip() not in PROFILE_ROLES:
        raise ValidationFailedError(
            f"role must be one of {list(PROFILE_ROLES)}, got {role!r}"
        )


def register_identity(db: Session, event: SignupEvent) -> Profile:
    """
    Insert the identity; the signup hook creates its profile in the same transaction.

    A repeated identity id fails with ConflictError rather than creating a second profile.
    """
    _validate_metadata_role(event)
    identity = Identity(
        id=event.id,
        email=event.email,
        raw_user_meta_data=event.user_metadata or None,
    )
    db.add(identity)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise translate_integrity_error(e, f"Identity {event.id} already exists") from e

    profile = db.get(Profile, event.id)
    logger.info(
        "Identity registered",
        extra={"identity_id": str(event.id), "role": profile.role if profile else None},
    )
    return profile


def remove_identity(db: Session, identity_id: uuid.UUID) -> bool:
    """
    Delete the identity. The database cascades its profile and grants and
    nulls the actor on its audit entries. Returns False if it did not exist.
    """
    result = db.execute(delete(Identity).where(Identity.id == identity_id))
    db.commit()
    removed = bool(result.rowcount)
    if removed:
        logger.info("Identity removed", extra={"identity_id": str(identity_id)})
    return removed
