"""Identity-provider webhook: signup and removal events, guarded by a shared secret."""

import hmac
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.errors import to_http_exception
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.schemas.identity import IdentityRemovedResponse, SignupEvent, SignupResponse
from app.schemas.profile import ProfileRead
from app.services.errors import ServiceError
from app.services.identity import register_identity, remove_identity

router = APIRouter()


def verify_webhook_secret(
    settings: Annotated[Settings, Depends(get_settings)],
    x_webhook_secret: Annotated[str | None, Header()] = None,
) -> None:
    """Dependency: require X-Webhook-Secret to match IDENTITY_WEBHOOK_SECRET. 503 when unconfigured."""
    expected = settings.IDENTITY_WEBHOOK_SECRET
    if expected is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Identity webhook is not configured.",
        )
    if x_webhook_secret is None or not hmac.compare_digest(
        x_webhook_secret.encode("utf-8"),
        expected.get_secret_value().encode("utf-8"),
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid webhook secret.",
        )


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(verify_webhook_secret)],
)
def post_signup(
    body: SignupEvent,
    db: Annotated[Session, Depends(get_db)],
) -> SignupResponse:
    """
    Record a new identity reported by the provider and return the profile created for it.

    full_name defaults to "User" and role to "user" unless user_metadata overrides them.
    Replaying the same identity id answers 409; no second profile is created.
    """
    try:
        profile = register_identity(db, body)
    except ServiceError as e:
        raise to_http_exception(e) from e
    return SignupResponse(identity_id=body.id, profile=ProfileRead.model_validate(profile))


@router.delete(
    "/{identity_id}",
    response_model=IdentityRemovedResponse,
    dependencies=[Depends(verify_webhook_secret)],
)
def delete_identity(
    identity_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
) -> IdentityRemovedResponse:
    """Remove an identity deleted at the provider; its profile and grants go with it."""
    removed = remove_identity(db, identity_id)
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Identity not found")
    return IdentityRemovedResponse(identity_id=identity_id, removed=True)
