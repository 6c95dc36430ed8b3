"""Stored growth plan ORM model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Column, Index, Text
from sqlalchemy.dialects.postgresql import UUID

from shopgrowth.db.base import Base
from shopgrowth.db.types import JSONBCompat, UTCDateTime


class GrowthPlanRecord(Base):
    __tablename__ = "growth_plans"
    __table_args__ = (
        Index("ix_growth_plans_business_category", "business_category"),
        Index("ix_growth_plans_created_at", "created_at"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(Text, nullable=True)
    business_category = Column(Text, nullable=False)
    growth_goal = Column(Text, nullable=False)
    inputs = Column(JSONBCompat, nullable=False, default=dict)
    document = Column(JSONBCompat, nullable=False)
    created_at = Column(UTCDateTime, nullable=False)
