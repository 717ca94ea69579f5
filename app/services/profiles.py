"""Profile reads and writes under the profile access policies."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Profile
from app.schemas.auth import AccessContext
from app.schemas.profile import ProfileCreate, ProfileUpdate
from app.services.activity import log_activity
from app.services.errors import NotFoundError, translate_integrity_error
from app.services.policy import (
    PRIVILEGED_PROFILE_FIELDS,
    check_profile_update,
    profile_visibility,
    require_admin,
)

logger = logging.getLogger(__name__)

# Columns that may be cleared by sending null; the rest ignore null.
NULLABLE_PROFILE_FIELDS = frozenset({"avatar_url"})


def list_profiles(db: Session, ctx: AccessContext) -> list[Profile]:
    """Visible profiles, newest first."""
    rows = db.scalars(
        select(Profile)
        .where(profile_visibility(ctx))
        .order_by(Profile.created_at.desc(), Profile.full_name)
    ).all()
    return list(rows)


def get_profile(db: Session, ctx: AccessContext, profile_id: uuid.UUID, *, for_update: bool = False) -> Profile:
    """Return one visible profile or raise NotFoundError."""
    stmt = select(Profile).where(Profile.id == profile_id, profile_visibility(ctx))
    if for_update:
        stmt = stmt.with_for_update()
    profile = db.scalars(stmt).first()
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


def create_profile(
    db: Session,
    ctx: AccessContext,
    body: ProfileCreate,
    ip_address: str | None = None,
) -> Profile:
    """Admin provisioning of a profile for an existing identity that has none."""
    require_admin(ctx, "profiles.insert")
    profile = Profile(**body.model_dump())
    db.add(profile)
    log_activity(
        db,
        ctx,
        action="user_created",
        entity_type="user",
        entity_id=body.id,
        details={"role": body.role, "created_by": "admin"},
        ip_address=ip_address,
    )
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise translate_integrity_error(e, f"Profile {body.id} already exists") from e
    logger.info("Profile provisioned", extra={"profile_id": str(body.id), "role": body.role})
    return profile


def update_profile(
    db: Session,
    ctx: AccessContext,
    profile_id: uuid.UUID,
    body: ProfileUpdate,
    ip_address: str | None = None,
) -> Profile:
    """
    Apply a partial update.

    The stored row is locked before the role/is_active comparison so a concurrent
    admin change cannot slip between the check and the write.
    """
    profile = get_profile(db, ctx, profile_id, for_update=True)
    changes = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_PROFILE_FIELDS
    }
    if not changes:
        return profile
    check_profile_update(ctx, profile, changes)

    previous = {field: getattr(profile, field) for field in changes}
    for field, value in changes.items():
        setattr(profile, field, value)

    privileged_changed = any(
        previous[f] != changes[f] for f in PRIVILEGED_PROFILE_FIELDS if f in changes
    )
    if profile.id == ctx.user_id and not privileged_changed:
        action = "profile_updated"
    elif set(changes) == {"is_active"}:
        action = "user_status_changed"
    else:
        action = "user_updated"
    log_activity(
        db,
        ctx,
        action=action,
        entity_type="user",
        entity_id=profile.id,
        details={"changes": sorted(changes)},
        ip_address=ip_address,
    )
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise translate_integrity_error(e, "Profile update conflicts with an existing row") from e
    logger.info(
        "Profile updated",
        extra={"profile_id": str(profile.id), "by": str(ctx.user_id), "fields": sorted(changes)},
    )
    return profile
