"""Completion tracking for the weekly tasks of stored plans.

Task state lives in a key/value store under ``plan:<plan_id>:tasks`` as a list
of plain dicts, one per scheduled task.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from shopgrowth.api.schemas.growth_plan import GrowthPlan
from shopgrowth.services.stores import KeyValueStore

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def tasks_key(plan_id: str) -> str:
    return f"plan:{plan_id}:tasks"


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def normalize_day(value: Optional[str]) -> Optional[str]:
    """Match a day name case-insensitively; accepts three-letter prefixes."""
    if not value:
        return None
    lowered = value.strip().lower()
    for name in WEEKDAY_NAMES:
        if name.lower() == lowered or name[:3].lower() == lowered:
            return name
    return None


def track_plan_tasks(store: KeyValueStore, plan_id: str, plan: GrowthPlan) -> int:
    records: List[Dict[str, Any]] = []
    for day in plan.day_plans:
        for task in day.tasks:
            records.append(
                {
                    "id": task.id,
                    "day": day.day_name,
                    "text": task.text,
                    "owner_label": task.owner_label,
                    "category": task.category.value,
                    "completed": False,
                    "completed_at": None,
                }
            )
    store.set(tasks_key(plan_id), records)
    logger.debug("Tracking %d tasks for plan %s", len(records), plan_id)
    return len(records)


def list_tasks(
    store: KeyValueStore,
    plan_id: str,
    *,
    day: Optional[str] = None,
    include_completed: bool = False,
) -> Optional[List[Dict[str, Any]]]:
    """Tracked tasks for a plan, or None when the plan has never been tracked."""
    records = store.get(tasks_key(plan_id))
    if records is None:
        return None
    return [
        record
        for record in records
        if (day is None or record["day"] == day) and (include_completed or not record["completed"])
    ]


def complete_task(
    store: KeyValueStore, plan_id: str, task_id: str, *, completed_at: datetime
) -> Optional[Dict[str, Any]]:
    records = store.get(tasks_key(plan_id))
    if records is None:
        return None
    for record in records:
        if record["id"] == task_id:
            if not record["completed"]:
                record["completed"] = True
                record["completed_at"] = completed_at.isoformat()
                store.set(tasks_key(plan_id), records)
                logger.info("Task %s completed for plan %s", task_id, plan_id)
            return record
    return None


def due_tasks(store: KeyValueStore, plan_id: str, day: str) -> List[Dict[str, Any]]:
    return list_tasks(store, plan_id, day=day) or []
