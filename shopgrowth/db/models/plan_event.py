"""Plan event log ORM model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Column, ForeignKey, Index, Text
from sqlalchemy.dialects.postgresql import UUID

from shopgrowth.db.base import Base
from shopgrowth.db.types import JSONBCompat, UTCDateTime


class PlanEvent(Base):
    """Something that happened to a stored plan: notification results, task completions."""

    __tablename__ = "plan_events"
    __table_args__ = (
        Index("ix_plan_events_plan_id", "plan_id"),
        Index("ix_plan_events_event_type", "event_type"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    plan_id = Column(UUID(as_uuid=True), ForeignKey("growth_plans.id", ondelete="CASCADE"), nullable=True)
    event_type = Column(Text, nullable=False)
    status = Column(Text, nullable=False)
    payload = Column(JSONBCompat, nullable=False, default=dict)
    reason = Column(Text, nullable=True)
    created_at = Column(UTCDateTime, nullable=False)
