"""Profile endpoints: list, read, admin provisioning, and updates under the profile policies."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.api.v1.auth import client_address, get_access_context
from app.api.v1.errors import to_http_exception
from app.core.database import get_db
from app.schemas.auth import AccessContext
from app.schemas.profile import (
    ProfileCreate,
    ProfileRead,
    ProfilesListResponse,
    ProfileUpdate,
)
from app.services.errors import ServiceError
from app.services.profiles import (
    create_profile,
    get_profile,
    list_profiles,
    update_profile,
)

router = APIRouter()


@router.get("", response_model=ProfilesListResponse)
def get_profiles(
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfilesListResponse:
    """List profiles, newest first. Admins see everyone; other callers see only themselves."""
    profiles = list_profiles(db, ctx)
    return ProfilesListResponse(profiles=[ProfileRead.model_validate(p) for p in profiles])


@router.get("/{profile_id}", response_model=ProfileRead)
def get_profile_by_id(
    profile_id: uuid.UUID,
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileRead:
    """Return one profile; 404 when it does not exist or is not visible to the caller."""
    try:
        profile = get_profile(db, ctx, profile_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    return ProfileRead.model_validate(profile)


@router.post("", response_model=ProfileRead, status_code=status.HTTP_201_CREATED)
def post_profile(
    body: ProfileCreate,
    request: Request,
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileRead:
    """Provision a profile for an existing identity (admin only)."""
    try:
        profile = create_profile(db, ctx, body, ip_address=client_address(request))
    except ServiceError as e:
        raise to_http_exception(e) from e
    return ProfileRead.model_validate(profile)


@router.patch("/{profile_id}", response_model=ProfileRead)
def patch_profile(
    profile_id: uuid.UUID,
    body: ProfileUpdate,
    request: Request,
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileRead:
    """
    Update a profile.

    Admins may change any field, including role and is_active (deactivation is how
    accounts are removed). Callers editing their own profile may change email,
    full_name and avatar_url; sending a different role or is_active is rejected with 403.
    """
    try:
        profile = update_profile(db, ctx, profile_id, body, ip_address=client_address(request))
    except ServiceError as e:
        raise to_http_exception(e) from e
    return ProfileRead.model_validate(profile)
