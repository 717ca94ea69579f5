"""Admin dashboard counters."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models import Menu, MenuGrant, Profile
from app.models.profile import ADMIN_ROLE
from app.schemas.auth import AccessContext
from app.schemas.stats import DashboardStats
from app.services.policy import require_admin


def _count(db: Session, model, *conditions) -> int:
    stmt = select(func.count()).select_from(model)
    if conditions:
        stmt = stmt.where(*conditions)
    return db.scalar(stmt) or 0


def dashboard_stats(db: Session, ctx: AccessContext) -> DashboardStats:
    """Totals across the whole system; admin only."""
    require_admin(ctx, "stats.read")
    return DashboardStats(
        total_users=_count(db, Profile),
        active_users=_count(db, Profile, Profile.is_active.is_(True)),
        admin_users=_count(db, Profile, Profile.role == ADMIN_ROLE, Profile.is_active.is_(True)),
        total_menus=_count(db, Menu),
        active_menus=_count(db, Menu, Menu.is_active.is_(True)),
        total_grants=_count(db, MenuGrant),
    )
