"""Menu grants: listing, single grant/revoke, and set reconciliation for one menu."""

import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import MenuGrant
from app.schemas.auth import AccessContext
from app.services.activity import log_activity
from app.services.errors import NotFoundError, translate_integrity_error
from app.services.menus import get_menu
from app.services.policy import grant_visibility, require_admin

logger = logging.getLogger(__name__)


def list_grants(
    db: Session,
    ctx: AccessContext,
    *,
    user_id: uuid.UUID | None = None,
    menu_id: uuid.UUID | None = None,
) -> list[MenuGrant]:
    """Visible grants, newest first, optionally narrowed to one user or menu."""
    stmt = select(MenuGrant).where(grant_visibility(ctx))
    if user_id is not None:
        stmt = stmt.where(MenuGrant.user_id == user_id)
    if menu_id is not None:
        stmt = stmt.where(MenuGrant.menu_id == menu_id)
    rows = db.scalars(stmt.order_by(MenuGrant.granted_at.desc(), MenuGrant.id)).all()
    return list(rows)


def grant_menu(
    db: Session,
    ctx: AccessContext,
    user_id: uuid.UUID,
    menu_id: uuid.UUID,
    ip_address: str | None = None,
) -> MenuGrant:
    """Grant one user access to one menu. A repeated (user, menu) pair raises ConflictError."""
    require_admin(ctx, "user_menus.insert")
    grant = MenuGrant(id=uuid.uuid4(), user_id=user_id, menu_id=menu_id, granted_by=ctx.user_id)
    db.add(grant)
    log_activity(
        db,
        ctx,
        action="menu_access_granted",
        entity_type="menu",
        entity_id=menu_id,
        details={"user_id": user_id},
        ip_address=ip_address,
    )
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise translate_integrity_error(e, "User already has access to this menu") from e
    logger.info("Menu access granted", extra={"menu_id": str(menu_id), "user_id": str(user_id)})
    return grant


def revoke_grant(
    db: Session,
    ctx: AccessContext,
    grant_id: uuid.UUID,
    ip_address: str | None = None,
) -> None:
    """Delete one grant by id."""
    require_admin(ctx, "user_menus.delete")
    grant = db.scalars(
        select(MenuGrant).where(MenuGrant.id == grant_id, grant_visibility(ctx))
    ).first()
    if grant is None:
        raise NotFoundError("Grant not found")
    log_activity(
        db,
        ctx,
        action="menu_access_revoked",
        entity_type="menu",
        entity_id=grant.menu_id,
        details={"user_id": grant.user_id},
        ip_address=ip_address,
    )
    db.delete(grant)
    db.commit()
    logger.info(
        "Menu access revoked",
        extra={"menu_id": str(grant.menu_id), "user_id": str(grant.user_id)},
    )


def reconcile_menu_grants(
    db: Session,
    ctx: AccessContext,
    menu_id: uuid.UUID,
    desired_user_ids: list[uuid.UUID],
    ip_address: str | None = None,
) -> tuple[list[uuid.UUID], list[uuid.UUID], list[MenuGrant]]:
    """
    Make the menu's grant set equal desired_user_ids in one transaction.

    Only the difference is written: grants for users no longer desired are deleted,
    grants for newly desired users are inserted, untouched grants keep their
    granted_by/granted_at. Any failure rolls back both halves.

    Returns (granted user ids, revoked user ids, grants on the menu afterwards).
    """
    require_admin(ctx, "user_menus.reconcile")
    get_menu(db, ctx, menu_id)

    desired = set(desired_user_ids)
    existing = set(
        db.scalars(select(MenuGrant.user_id).where(MenuGrant.menu_id == menu_id)).all()
    )
    to_revoke = sorted(existing - desired, key=str)
    to_grant = sorted(desired - existing, key=str)

    try:
        if to_revoke:
            db.execute(
                delete(MenuGrant).where(
                    MenuGrant.menu_id == menu_id,
                    MenuGrant.user_id.in_(to_revoke),
                )
            )
        for user_id in to_grant:
            db.add(
                MenuGrant(
                    id=uuid.uuid4(),
                    user_id=user_id,
                    menu_id=menu_id,
                    granted_by=ctx.user_id,
                )
            )
        log_activity(
            db,
            ctx,
            action="menu_access_updated",
            entity_type="menu",
            entity_id=menu_id,
            details={"granted": to_grant, "revoked": to_revoke, "user_count": len(desired)},
            ip_address=ip_address,
        )
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise translate_integrity_error(e, "Concurrent grant change on this menu; retry") from e

    logger.info(
        "Menu access reconciled",
        extra={"menu_id": str(menu_id), "granted": len(to_grant), "revoked": len(to_revoke)},
    )
    return to_grant, to_revoke, list_grants(db, ctx, menu_id=menu_id)
