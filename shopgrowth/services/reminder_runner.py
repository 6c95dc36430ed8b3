"""Batch runner sending daily task reminders for stored plans."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from shopgrowth.core.context import bind_plan_id
from shopgrowth.services import plan_repository, task_tracker
from shopgrowth.services.notifications.base import NotificationResult
from shopgrowth.services.notifications.hooks import notify_task_reminders
from shopgrowth.services.stores import KeyValueStore


logger = logging.getLogger(__name__)


@dataclass
class ReminderRunResult:
    plans_processed: int
    reminders_sent: int
    skipped: int = 0
    failed: int = 0


def run_reminders_for_plan(
    db: Session,
    store: KeyValueStore,
    plan_id: str,
    *,
    day: str,
    request_id: str | None = None,
) -> NotificationResult:
    tasks = task_tracker.due_tasks(store, plan_id, day)
    with bind_plan_id(plan_id):
        return notify_task_reminders(db, plan_id=plan_id, day=day, tasks=tasks, request_id=request_id)


def run_reminders_for_all_plans(
    db: Session,
    store: KeyValueStore,
    *,
    day: str,
    plan_ids: Optional[Iterable[str]] = None,
) -> ReminderRunResult:
    ids = list(plan_ids) if plan_ids is not None else [str(record.id) for record in plan_repository.list_plans(db)]
    result = ReminderRunResult(plans_processed=0, reminders_sent=0)
    for plan_id in ids:
        outcome = run_reminders_for_plan(db, store, plan_id, day=day)
        result.plans_processed += 1
        if outcome.status == "sent":
            result.reminders_sent += 1
        elif outcome.status == "failed":
            result.failed += 1
        else:
            result.skipped += 1
    logger.info(
        "Reminder run for %s: plans=%s sent=%s skipped=%s failed=%s",
        day,
        result.plans_processed,
        result.reminders_sent,
        result.skipped,
        result.failed,
    )
    return result
