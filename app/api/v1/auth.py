"""Bearer-token auth dependencies (identity, access context, admin) and the caller's own endpoints."""

import logging
import uuid
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import decode_access_token, identity_id_from_payload
from app.schemas.auth import AccessContext
from app.schemas.menu import MenuRead, MenusListResponse
from app.schemas.profile import ProfileRead
from app.services.errors import NotFoundError
from app.services.menus import list_navigation
from app.services.policy import load_access_context
from app.services.profiles import get_profile

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def client_address(request: Request) -> str | None:
    """Source address recorded on audit entries."""
    return request.client.host if request.client else None


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> uuid.UUID:
    """Dependency: require a valid provider-issued Bearer JWT and return its identity id. Raises 401."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    try:
        return identity_id_from_payload(payload)
    except ValueError:
        raise _unauthorized("Invalid token payload")


def get_session_context(
    identity_id: Annotated[uuid.UUID, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> AccessContext:
    """
    Dependency: load the caller's AccessContext once for this request.

    Does not reject inactive accounts; only GET /me uses it directly so clients can show a lockout notice.
    """
    ctx = load_access_context(db, identity_id)
    if not ctx.has_profile:
        raise _unauthorized("Profile not found")
    return ctx


def get_access_context(
    ctx: Annotated[AccessContext, Depends(get_session_context)],
) -> AccessContext:
    """Dependency: like get_session_context, but deactivated accounts are locked out with 403."""
    if not ctx.is_active:
        logger.info("Rejected request from inactive account", extra={"user_id": str(ctx.user_id)})
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account inactive",
        )
    return ctx


def require_admin(
    ctx: Annotated[AccessContext, Depends(get_access_context)],
) -> AccessContext:
    """Dependency: require an active admin. Raises 403 for everyone else."""
    if not ctx.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return ctx


@router.get("", response_model=ProfileRead)
def get_me(
    ctx: Annotated[AccessContext, Depends(get_session_context)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileRead:
    """Return the caller's own profile, including is_active so clients can render a lockout notice."""
    try:
        profile = get_profile(db, ctx, ctx.user_id)
    except NotFoundError:
        raise _unauthorized("Profile not found")
    return ProfileRead.model_validate(profile)


@router.get("/menus", response_model=MenusListResponse)
def get_my_menus(
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> MenusListResponse:
    """Navigation for the caller: active menus granted to them, in display order."""
    menus = list_navigation(db, ctx)
    return MenusListResponse(menus=[MenuRead.model_validate(m) for m in menus])
