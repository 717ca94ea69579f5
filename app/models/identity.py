"""ORM model mirroring identities issued by the external identity provider."""

import uuid

from sqlalchemy import Column, DateTime, String, Uuid, func

from app.models.base import Base, JSONType, utcnow


class Identity(Base):
    """
    One row per identity the provider has reported through its signup webhook.

    Credentials never reach this table; it only anchors foreign keys from profiles,
    grants, menus and activity logs. Inserting a row fires the signup hook that
    creates the matching Profile (see app.models.events).
    """

    __tablename__ = "identities"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(320), nullable=False)
    raw_user_meta_data = Column(JSONType, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
