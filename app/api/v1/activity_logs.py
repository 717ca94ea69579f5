"""Activity log endpoints: append as the caller, list visible entries."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from app.api.v1.auth import client_address, get_access_context
from app.api.v1.errors import to_http_exception
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.schemas.activity import (
    ActivityLogCreate,
    ActivityLogRead,
    ActivityLogsListResponse,
)
from app.schemas.auth import AccessContext
from app.services.activity import list_activity, record_activity
from app.services.errors import ServiceError

router = APIRouter()


@router.get("", response_model=ActivityLogsListResponse)
def get_activity_logs(
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    limit: Annotated[int, Query(ge=1)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
    action: Annotated[str | None, Query(max_length=128)] = None,
    entity_type: Annotated[str | None, Query(max_length=64)] = None,
) -> ActivityLogsListResponse:
    """Audit entries, newest first. Admins see all entries; other callers see their own."""
    if limit > settings.ACTIVITY_LOG_PAGE_MAX:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"limit must be at most {settings.ACTIVITY_LOG_PAGE_MAX}.",
        )
    items, total = list_activity(
        db, ctx, limit=limit, offset=offset, action=action, entity_type=entity_type
    )
    return ActivityLogsListResponse(
        items=[ActivityLogRead.model_validate(i) for i in items],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post("", response_model=ActivityLogRead, status_code=status.HTTP_201_CREATED)
def post_activity_log(
    body: ActivityLogCreate,
    request: Request,
    ctx: Annotated[AccessContext, Depends(get_access_context)],
    db: Annotated[Session, Depends(get_db)],
) -> ActivityLogRead:
    """Append an audit entry as the caller. 403 if user_id names anyone else."""
    try:
        entry = record_activity(db, ctx, body, ip_address=client_address(request))
    except ServiceError as e:
        raise to_http_exception(e) from e
    return ActivityLogRead.model_validate(entry)
