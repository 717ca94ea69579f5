"""
Row-level access policies for profiles, menus, grants and activity logs.

Reads are constrained by SQL predicates built from the caller's AccessContext, so a
denied row is simply absent. Writes are checked against the same context before they
reach the database; a row the caller cannot see surfaces as NotFoundError, a row that
fails a check surfaces as PolicyViolationError.

The context is loaded once per request (load_access_context) and passed explicitly to
every check; nothing here re-queries the caller's profile per row.
"""

import logging
import uuid
from typing import Any

from sqlalchemy import and_, exists, true
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from app.models import ActivityLog, Menu, MenuGrant, Profile
from app.schemas.auth import AccessContext
from app.services.errors import PolicyViolationError

logger = logging.getLogger(__name__)

ROW_POLICY_MESSAGE = "new row violates row-level security policy"

# Fields only an admin may change on a profile.
PRIVILEGED_PROFILE_FIELDS = ("role", "is_active")


def load_access_context(db: Session, user_id: uuid.UUID) -> AccessContext:
    """
    Build the caller context from their profile. A missing profile yields a
    context with no role and is_active=False; this never raises.
    """
    profile = db.get(Profile, user_id)
    if profile is None:
        return AccessContext(user_id=user_id)
    return AccessContext(
        user_id=user_id,
        role=profile.role,
        is_active=bool(profile.is_active),
        has_profile=True,
    )


# --- read predicates ---------------------------------------------------------


def profile_visibility(ctx: AccessContext) -> ColumnElement[bool]:
    """Admins see every profile; everyone else sees their own."""
    if ctx.is_admin:
        return true()
    return Profile.id == ctx.user_id


def menu_visibility(ctx: AccessContext) -> ColumnElement[bool]:
    """Admins see every menu; everyone else sees active menus granted to them."""
    if ctx.is_admin:
        return true()
    granted = exists().where(
        MenuGrant.user_id == ctx.user_id,
        MenuGrant.menu_id == Menu.id,
    )
    return and_(Menu.is_active.is_(True), granted)


def grant_visibility(ctx: AccessContext) -> ColumnElement[bool]:
    """Admins see every grant; everyone else sees grants made to them."""
    if ctx.is_admin:
        return true()
    return MenuGrant.user_id == ctx.user_id


def activity_visibility(ctx: AccessContext) -> ColumnElement[bool]:
    """Admins see every audit entry; everyone else sees entries they authored."""
    if ctx.is_admin:
        return true()
    return ActivityLog.user_id == ctx.user_id


# --- write checks ------------------------------------------------------------


def require_admin(ctx: AccessContext, operation: str) -> None:
    """Admin-only writes: insert/update/delete menus, insert/delete grants, insert profiles."""
    if not ctx.is_admin:
        logger.info(
            "Policy denied admin-only write",
            extra={"user_id": str(ctx.user_id), "operation": operation},
        )
        raise PolicyViolationError(ROW_POLICY_MESSAGE)


def check_profile_update(ctx: AccessContext, current: Profile, changes: dict[str, Any]) -> None:
    """
    Admins may change any field of any profile. A caller updating their own profile
    must leave role and is_active at their stored values.

    current must be the stored row, read in the same transaction (and locked) as the write.
    """
    if ctx.is_admin:
        return
    if current.id != ctx.user_id:
        # Not visible to the caller; callers filter with profile_visibility first.
        raise PolicyViolationError(ROW_POLICY_MESSAGE)
    for field in PRIVILEGED_PROFILE_FIELDS:
        if field in changes and changes[field] != getattr(current, field):
            logger.info(
                "Policy denied self-service change of privileged field",
                extra={"user_id": str(ctx.user_id), "field": field},
            )
            raise PolicyViolationError(ROW_POLICY_MESSAGE)


def check_activity_insert(ctx: AccessContext, actor_id: uuid.UUID | None) -> None:
    """Audit entries may only be written with the caller as the actor."""
    if actor_id != ctx.user_id:
        logger.info(
            "Policy denied audit entry for another actor",
            extra={"user_id": str(ctx.user_id), "actor_id": str(actor_id)},
        )
        raise PolicyViolationError(ROW_POLICY_MESSAGE)
