"""ORM model for user profiles: role and activation state per identity."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    String,
    Uuid,
    func,
    true,
)

from app.models.base import Base, utcnow

PROFILE_ROLES: tuple[str, ...] = ("admin", "user", "employee")
ADMIN_ROLE = "admin"
DEFAULT_ROLE = "user"
DEFAULT_FULL_NAME = "User"


class Profile(Base):
    """
    Profile for an identity; created by the signup hook, never hard-deleted by the API.

    role: 'admin', 'user' or 'employee'. Deactivation (is_active=False) is the deletion surrogate.
    """

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint(
            "role IN ('admin', 'user', 'employee')",
            name="ck_profiles_role",
        ),
    )

    id = Column(
        Uuid,
        ForeignKey("identities.id", ondelete="CASCADE"),
        primary_key=True,
    )
    email = Column(String(320), nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=DEFAULT_ROLE, server_default=DEFAULT_ROLE, index=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true(), index=True)
    avatar_url = Column(String(2048), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
