"""Persistence helpers for stored growth plans."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from shopgrowth.api.schemas.growth_plan import BusinessCategory, PersistedPlanDocument
from shopgrowth.db.models.growth_plan import GrowthPlanRecord
from shopgrowth.db.models.plan_event import PlanEvent

logger = logging.getLogger(__name__)


def save_plan_document(db: Session, document: PersistedPlanDocument, *, growth_goal: str) -> GrowthPlanRecord:
    record = GrowthPlanRecord(
        user_id=document.user_id,
        business_category=document.business_type.value,
        growth_goal=growth_goal,
        inputs=document.inputs,
        document=document.model_dump(mode="json"),
        created_at=document.created_at,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Stored plan %s (category=%s)", record.id, record.business_category)
    return record


def _parse_plan_id(plan_id: str | UUID) -> Optional[UUID]:
    if isinstance(plan_id, UUID):
        return plan_id
    try:
        return UUID(str(plan_id))
    except ValueError:
        return None


def load_plan(db: Session, plan_id: str | UUID) -> Optional[GrowthPlanRecord]:
    parsed = _parse_plan_id(plan_id)
    if parsed is None:
        return None
    return db.get(GrowthPlanRecord, parsed)


def load_latest_plan(db: Session, category: Optional[BusinessCategory] = None) -> Optional[GrowthPlanRecord]:
    """Newest stored plan, optionally restricted to one business category."""
    query = db.query(GrowthPlanRecord)
    if category is not None:
        query = query.filter(GrowthPlanRecord.business_category == category.value)
    return query.order_by(GrowthPlanRecord.created_at.desc()).first()


def list_plans(db: Session) -> List[GrowthPlanRecord]:
    return db.query(GrowthPlanRecord).order_by(GrowthPlanRecord.created_at.desc()).all()


def plans_by_category(db: Session) -> Dict[str, List[GrowthPlanRecord]]:
    grouped: Dict[str, List[GrowthPlanRecord]] = {}
    for record in list_plans(db):
        grouped.setdefault(record.business_category, []).append(record)
    return grouped


def to_document(record: GrowthPlanRecord) -> PersistedPlanDocument:
    return PersistedPlanDocument.model_validate(record.document)


def record_event(
    db: Session,
    *,
    plan_id: Optional[UUID],
    event_type: str,
    status: str,
    payload: Dict[str, Any],
    reason: Optional[str] = None,
) -> PlanEvent:
    event = PlanEvent(
        plan_id=plan_id,
        event_type=event_type,
        status=status,
        payload=payload,
        reason=reason,
        created_at=datetime.now(timezone.utc),
    )
    db.add(event)
    db.commit()
    return event
