"""Menu catalog reads and admin-only writes."""

import logging
import uuid

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from app.models import Menu, MenuGrant
from app.schemas.auth import AccessContext
from app.schemas.menu import MenuCreate, MenuUpdate
from app.services.activity import log_activity
from app.services.errors import NotFoundError
from app.services.policy import menu_visibility, require_admin

logger = logging.getLogger(__name__)

NULLABLE_MENU_FIELDS = frozenset({"description"})


def list_menus(db: Session, ctx: AccessContext) -> list[Menu]:
    """Visible menus in display order (order_index, then name)."""
    rows = db.scalars(
        select(Menu)
        .where(menu_visibility(ctx))
        .order_by(Menu.order_index, Menu.name, Menu.id)
    ).all()
    return list(rows)


def list_navigation(db: Session, ctx: AccessContext) -> list[Menu]:
    """
    The caller's own navigation: active menus granted to them, in display order.

    Unlike list_menus this ignores admin visibility, so an admin sees only what they were granted.
    """
    granted = exists().where(MenuGrant.user_id == ctx.user_id, MenuGrant.menu_id == Menu.id)
    rows = db.scalars(
        select(Menu)
        .where(Menu.is_active.is_(True), granted)
        .order_by(Menu.order_index, Menu.name, Menu.id)
    ).all()
    return list(rows)


def get_menu(db: Session, ctx: AccessContext, menu_id: uuid.UUID) -> Menu:
    """Return one visible menu or raise NotFoundError."""
    menu = db.scalars(select(Menu).where(Menu.id == menu_id, menu_visibility(ctx))).first()
    if menu is None:
        raise NotFoundError("Menu not found")
    return menu


def create_menu(
    db: Session,
    ctx: AccessContext,
    body: MenuCreate,
    ip_address: str | None = None,
) -> Menu:
    """Insert a menu with the caller recorded as creator."""
    require_admin(ctx, "menus.insert")
    menu = Menu(id=uuid.uuid4(), created_by=ctx.user_id, **body.model_dump())
    db.add(menu)
    log_activity(
        db,
        ctx,
        action="menu_created",
        entity_type="menu",
        entity_id=menu.id,
        details={"name": menu.name, "route": menu.route},
        ip_address=ip_address,
    )
    db.commit()
    logger.info("Menu created", extra={"menu_id": str(menu.id), "route": menu.route})
    return menu


def update_menu(
    db: Session,
    ctx: AccessContext,
    menu_id: uuid.UUID,
    body: MenuUpdate,
    ip_address: str | None = None,
) -> Menu:
    """Apply a partial update to a menu."""
    require_admin(ctx, "menus.update")
    menu = get_menu(db, ctx, menu_id)
    changes = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_MENU_FIELDS
    }
    if not changes:
        return menu
    for field, value in changes.items():
        setattr(menu, field, value)
    log_activity(
        db,
        ctx,
        action="menu_updated",
        entity_type="menu",
        entity_id=menu.id,
        details={"changes": sorted(changes)},
        ip_address=ip_address,
    )
    db.commit()
    logger.info("Menu updated", extra={"menu_id": str(menu.id), "fields": sorted(changes)})
    return menu


def delete_menu(
    db: Session,
    ctx: AccessContext,
    menu_id: uuid.UUID,
    ip_address: str | None = None,
) -> None:
    """Delete a menu; the database removes every grant that references it."""
    require_admin(ctx, "menus.delete")
    menu = get_menu(db, ctx, menu_id)
    log_activity(
        db,
        ctx,
        action="menu_deleted",
        entity_type="menu",
        entity_id=menu.id,
        details={"name": menu.name, "route": menu.route},
        ip_address=ip_address,
    )
    db.delete(menu)
    db.commit()
    logger.info("Menu deleted", extra={"menu_id": str(menu_id)})
