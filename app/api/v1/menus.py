"""Menu catalog endpoints, plus grant listing and reconciliation for a single menu."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import client_address, get_access_context
from app.api.v1.errors import to_http_exception
from app.core.database import get_db
from app.schemas.auth import AccessContext
from app.schemas.grant import (
    GrantRead,
    GrantReconcileResponse,
    GrantSetRequest,
    GrantsListResponse,
)
from app.schemas.menu import MenuCreate, MenuRead, MenusListResponse, MenuUpdate
from app.services.errors import ServiceError
from app.services.grants import list_grants, reconcile_menu_grants
from app.services.menus import (
    create_menu,
    delete_menu,
    get_menu,
    list_menus,
    update_menu,
)

router = APIRouter()


@router.get("", response_model=MenusListResponse)
def get_menus(
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> MenusListResponse:
    """
    List menus in display order.

    Admins see the whole catalog, inactive entries included. Other callers see
    exactly the active menus they have been granted.
    """
    menus = list_menus(db, ctx)
    return MenusListResponse(menus=[MenuRead.model_validate(m) for m in menus])


@router.get("/{menu_id}", response_model=MenuRead)
def get_menu_by_id(
    menu_id: uuid.UUID,
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> MenuRead:
    """Return one menu; 404 when it does not exist or is not visible to the caller."""
    try:
        menu = get_menu(db, ctx, menu_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    return MenuRead.model_validate(menu)


@router.post("", response_model=MenuRead, status_code=status.HTTP_201_CREATED)
def post_menu(
    body: MenuCreate,
    request: Request,
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> MenuRead:
    """Create a menu (admin only). The caller is recorded as created_by."""
    try:
        menu = create_menu(db, ctx, body, ip_address=client_address(request))
    except ServiceError as e:
        raise to_http_exception(e) from e
    return MenuRead.model_validate(menu)


@router.patch("/{menu_id}", response_model=MenuRead)
def patch_menu(
    menu_id: uuid.UUID,
    body: MenuUpdate,
    request: Request,
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> MenuRead:
    """Update a menu (admin only)."""
    try:
        menu = update_menu(db, ctx, menu_id, body, ip_address=client_address(request))
    except ServiceError as e:
        raise to_http_exception(e) from e
    return MenuRead.model_validate(menu)


@router.delete("/{menu_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_menu(
    menu_id: uuid.UUID,
    request: Request,
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Delete a menu (admin only). Every grant on it is removed too."""
    try:
        delete_menu(db, ctx, menu_id, ip_address=client_address(request))
    except ServiceError as e:
        raise to_http_exception(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{menu_id}/grants", response_model=GrantsListResponse)
def get_menu_grants(
    menu_id: uuid.UUID,
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> GrantsListResponse:
    """Grants on one menu that are visible to the caller."""
    grants = list_grants(db, ctx, menu_id=menu_id)
    return GrantsListResponse(grants=[GrantRead.model_validate(g) for g in grants])


@router.put("/{menu_id}/grants", response_model=GrantReconcileResponse)
def put_menu_grants(
    menu_id: uuid.UUID,
    body: GrantSetRequest,
    request: Request,
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> GrantReconcileResponse:
    """
    Set exactly which users can access a menu (admin only).

    Computes the difference against the current grants and applies it in one
    transaction; on failure nothing changes and the request can be repeated.
    """
    try:
        granted, revoked, grants = reconcile_menu_grants(
            db, ctx, menu_id, body.user_ids, ip_address=client_address(request)
        )
    except ServiceError as e:
        raise to_http_exception(e) from e
    return GrantReconcileResponse(
        menu_id=menu_id,
        granted=granted,
        revoked=revoked,
        grants=[GrantRead.model_validate(g) for g in grants],
    )
