"""Activity (audit) log: append entries as the caller and list visible entries."""

import logging
import uuid
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models import ActivityLog
from app.schemas.activity import ActivityLogCreate
from app.schemas.auth import AccessContext
from app.services.policy import activity_visibility, check_activity_insert

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    """Convert UUIDs (and containers of them) so details can be stored as JSON."""
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_json_safe(v) for v in value]
    return value


def log_activity(
    db: Session,
    ctx: AccessContext,
    *,
    action: str,
    entity_type: str,
    entity_id: uuid.UUID | None = None,
    details: dict[str, Any] | None = None,
    ip_address: str | None = None,
    actor_id: uuid.UUID | None = None,
) -> ActivityLog:
    """
    Stage an audit entry in the current transaction; the caller commits.

    actor_id defaults to the caller and must equal the caller when given.
    """
    actor = ctx.user_id if actor_id is None else actor_id
    check_activity_insert(ctx, actor)
    entry = ActivityLog(
        id=uuid.uuid4(),
        user_id=actor,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=_json_safe(details) if details is not None else None,
        ip_address=ip_address,
    )
    db.add(entry)
    logger.info(
        "Activity recorded",
        extra={"user_id": str(actor), "action": action, "entity_type": entity_type},
    )
    return entry


def record_activity(
    db: Session,
    ctx: AccessContext,
    body: ActivityLogCreate,
    ip_address: str | None = None,
) -> ActivityLog:
    """Append a client-submitted entry and commit."""
    entry = log_activity(
        db,
        ctx,
        action=body.action,
        entity_type=body.entity_type,
        entity_id=body.entity_id,
        details=body.details,
        ip_address=ip_address,
        actor_id=body.user_id,
    )
    db.commit()
    return entry


def list_activity(
    db: Session,
    ctx: AccessContext,
    *,
    limit: int,
    offset: int = 0,
    action: str | None = None,
    entity_type: str | None = None,
) -> tuple[list[ActivityLog], int]:
    """Return (page of visible entries newest first, total visible count)."""
    conditions = [activity_visibility(ctx)]
    if action:
        conditions.append(ActivityLog.action == action)
    if entity_type:
        conditions.append(ActivityLog.entity_type == entity_type)

    total = db.scalar(select(func.count()).select_from(ActivityLog).where(*conditions)) or 0
    rows = db.scalars(
        select(ActivityLog)
        .where(*conditions)
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id)
        .limit(limit)
        .offset(offset)
    ).all()
    return list(rows), total
