"""Admin-only overview endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.core.database import get_db
from app.schemas.auth import AccessContext
from app.schemas.stats import DashboardStats
from app.services.stats import dashboard_stats

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
def get_stats(
    ctx: Annotated[AccessContext, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> DashboardStats:
    """Counts of users, active users, active admins, menus, active menus and grants."""
    return dashboard_stats(db, ctx)
