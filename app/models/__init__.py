"""SQLAlchemy ORM models."""

from app.models.activity_log import ActivityLog
from app.models.base import Base
from app.models.identity import Identity
from app.models.menu import Menu, MenuGrant
from app.models.profile import Profile
from app.models import events  # noqa: F401  (registers mapper hooks)

__all__ = ["ActivityLog", "Base", "Identity", "Menu", "MenuGrant", "Profile"]
