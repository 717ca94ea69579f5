"""Grant endpoints: list visible grants, grant one (user, menu) pair, revoke by id."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import client_address, get_access_context
from app.api.v1.errors import to_http_exception
from app.core.database import get_db
from app.schemas.auth import AccessContext
from app.schemas.grant import GrantCreate, GrantRead, GrantsListResponse
from app.services.errors import ServiceError
from app.services.grants import grant_menu, list_grants, revoke_grant

router = APIRouter()


@router.get("", response_model=GrantsListResponse)
def get_grants(
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
    user_id: Annotated[uuid.UUID | None, Query()] = None,
    menu_id: Annotated[uuid.UUID | None, Query()] = None,
) -> GrantsListResponse:
    """List grants. Admins see all; other callers see grants made to them."""
    grants = list_grants(db, ctx, user_id=user_id, menu_id=menu_id)
    return GrantsListResponse(grants=[GrantRead.model_validate(g) for g in grants])


@router.post("", response_model=GrantRead, status_code=status.HTTP_201_CREATED)
def post_grant(
    body: GrantCreate,
    request: Request,
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> GrantRead:
    """Grant a user access to a menu (admin only). 409 if the pair already exists."""
    try:
        grant = grant_menu(
            db, ctx, body.user_id, body.menu_id, ip_address=client_address(request)
        )
    except ServiceError as e:
        raise to_http_exception(e) from e
    return GrantRead.model_validate(grant)


@router.delete("/{grant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_grant(
    grant_id: uuid.UUID,
    request: Request,
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Revoke one grant (admin only)."""
    try:
        revoke_grant(db, ctx, grant_id, ip_address=client_address(request))
    except ServiceError as e:
        raise to_http_exception(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
