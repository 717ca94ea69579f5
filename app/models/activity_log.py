"""ORM model for the append-only audit trail."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid, func

from app.models.base import Base, JSONType, utcnow


class ActivityLog(Base):
    """
    One action taken by an identity. Rows are written once and never updated.

    user_id becomes NULL if the acting identity is later removed.
    """

    __tablename__ = "activity_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("identities.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    action = Column(String(128), nullable=False)
    entity_type = Column(String(64), nullable=False)
    entity_id = Column(Uuid, nullable=True)
    details = Column(JSONType, nullable=True)
    ip_address = Column(String(64), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True,
    )
