"""ORM models for the navigation menu catalog and per-user menu grants."""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
    true,
)

from app.models.base import Base, utcnow

DEFAULT_MENU_ICON = "Layout"


class Menu(Base):
    """Navigable section managed by admins. order_index defines display order."""

    __tablename__ = "menus"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String(64), nullable=False, default=DEFAULT_MENU_ICON, server_default=DEFAULT_MENU_ICON)
    route = Column(String(1024), nullable=False)
    order_index = Column(Integer, nullable=False, default=0, server_default="0", index=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true(), index=True)
    created_by = Column(Uuid, ForeignKey("identities.id", ondelete="SET NULL"), nullable=True)
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


class MenuGrant(Base):
    """
    Grants one identity visibility of one menu.

    Unique per (user_id, menu_id); removed by the database when the menu or the identity goes away.
    """

    __tablename__ = "user_menus"
    __table_args__ = (
        UniqueConstraint("user_id", "menu_id", name="uq_user_menus_user_menu"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("identities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    menu_id = Column(
        Uuid,
        ForeignKey("menus.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    granted_by = Column(Uuid, ForeignKey("identities.id", ondelete="SET NULL"), nullable=True)
    granted_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
