"""Pydantic request/response schemas."""

from app.schemas.activity import (
    ActivityLogCreate,
    ActivityLogRead,
    ActivityLogsListResponse,
)
from app.schemas.auth import AccessContext
from app.schemas.grant import (
    GrantCreate,
    GrantRead,
    GrantReconcileResponse,
    GrantSetRequest,
    GrantsListResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.identity import IdentityRemovedResponse, SignupEvent, SignupResponse
from app.schemas.menu import MenuCreate, MenuRead, MenusListResponse, MenuUpdate
from app.schemas.profile import (
    ProfileCreate,
    ProfileRead,
    ProfilesListResponse,
    ProfileUpdate,
    Role,
)
from app.schemas.stats import DashboardStats

__all__ = [
    "AccessContext",
    "ActivityLogCreate",
    "ActivityLogRead",
    "ActivityLogsListResponse",
    "DashboardStats",
    "GrantCreate",
    "GrantRead",
    "GrantReconcileResponse",
    "GrantSetRequest",
    "GrantsListResponse",
    "HealthResponse",
    "IdentityRemovedResponse",
    "MenuCreate",
    "MenuRead",
    "MenuUpdate",
    "MenusListResponse",
    "ProfileCreate",
    "ProfileRead",
    "ProfileUpdate",
    "ProfilesListResponse",
    "Role",
    "SignupEvent",
    "SignupResponse",
]
