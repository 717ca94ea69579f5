"""Schema for the admin dashboard overview."""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    """Counters shown on the admin overview."""

    total_users: int
    active_users: int
    admin_users: int
    total_menus: int
    active_menus: int
    total_grants: int
