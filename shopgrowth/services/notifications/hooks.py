"""Notification hook utilities.

Every dispatch is recorded as a ``plan_events`` row with status ``sent``,
``failed`` or ``skipped``. Provider errors are logged and recorded, never raised.
"""
from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session, sessionmaker

from shopgrowth.core.config import settings
from shopgrowth.core.context import bind_plan_id
from shopgrowth.observability.metrics import log_metric
from shopgrowth.observability.tracing import trace
from shopgrowth.services.notifications.base import NotificationMessage, NotificationResult
from shopgrowth.services.notifications.factory import get_notification_service
from shopgrowth.services.plan_repository import record_event


logger = logging.getLogger(__name__)

EVENT_TYPES = {
    "plan_ready": "notification_plan_ready",
    "task_reminder": "notification_task_reminder",
}
REMINDER_PREVIEW_TASKS = 3


def notify_plan_ready(
    db: Session,
    *,
    plan_id: str,
    business_category: str,
    goal_label: str,
    task_count: int,
    request_id: str | None,
) -> NotificationResult:
    message = NotificationMessage(
        category="plan_ready",
        message_text=f"Your {goal_label} plan for your {business_category} shop is ready: {task_count} tasks this week.",
    )
    return _notify(
        db,
        job_name="plan_ready",
        plan_id=plan_id,
        message=message,
        request_id=request_id,
        extra={"business_category": business_category, "task_count": task_count},
    )


def notify_task_reminders(
    db: Session,
    *,
    plan_id: str,
    day: str,
    tasks: List[Dict[str, Any]],
    request_id: str | None,
) -> NotificationResult:
    extra = {"day": day, "task_ids": [task["id"] for task in tasks]}
    if not tasks:
        return _record(
            db,
            "task_reminder",
            plan_id,
            NotificationResult(status="skipped", reason="no tasks due"),
            request_id=request_id,
            extra=extra,
        )
    preview = "; ".join(task["text"] for task in tasks[:REMINDER_PREVIEW_TASKS])
    remaining = len(tasks) - REMINDER_PREVIEW_TASKS
    if remaining > 0:
        preview = f"{preview} (+{remaining} more)"
    message = NotificationMessage(
        category="task_reminder",
        message_text=f"{day}: {len(tasks)} task(s) still open. {preview}",
        priority="high" if len(tasks) > REMINDER_PREVIEW_TASKS else "normal",
    )
    return _notify(
        db,
        job_name="task_reminder",
        plan_id=plan_id,
        message=message,
        request_id=request_id,
        extra=extra,
    )


def dispatch_plan_ready(
    session_factory: sessionmaker,
    *,
    plan_id: str,
    business_category: str,
    goal_label: str,
    task_count: int,
    request_id: str | None,
) -> None:
    """Background-task entry point; opens its own session since the request's is closed by then."""
    db = session_factory()
    try:
        with bind_plan_id(plan_id):
            notify_plan_ready(
                db,
                plan_id=plan_id,
                business_category=business_category,
                goal_label=goal_label,
                task_count=task_count,
                request_id=request_id,
            )
    except Exception:
        logger.exception("Could not record plan_ready notification for plan %s", plan_id)
    finally:
        db.close()


def _notify(
    db: Session,
    *,
    job_name: str,
    plan_id: str,
    message: NotificationMessage,
    request_id: str | None,
    extra: dict,
) -> NotificationResult:
    if not settings.notifications_enabled:
        return _record(
            db,
            job_name,
            plan_id,
            NotificationResult(status="skipped", reason="notifications disabled"),
            request_id=request_id,
            extra=extra,
        )

    service = get_notification_service()
    destination = settings.notification_destination
    metadata = {
        "plan_id": plan_id,
        "provider": settings.notifications_provider,
        "category": message.category,
        "priority": message.priority,
    }
    start = perf_counter()
    with trace(f"notifications.{job_name}", metadata=metadata, plan_id=plan_id, request_id=request_id):
        try:
            delivered = service.send(message, destination)
        except Exception as exc:
            logger.exception("Notification provider %s failed for plan %s", settings.notifications_provider, plan_id)
            result = NotificationResult(status="failed", reason=f"provider error: {exc}")
        else:
            result = (
                NotificationResult(status="sent", reason=f"delivered to {destination}")
                if delivered
                else NotificationResult(status="failed", reason="provider rejected message")
            )
    duration_ms = (perf_counter() - start) * 1000
    log_metric(f"notifications.{result.status}", 1, metadata={"job": job_name, "provider": settings.notifications_provider})
    log_metric("notifications.duration_ms", duration_ms, metadata={"job": job_name})
    return _record(db, job_name, plan_id, result, request_id=request_id, extra={**extra, "message": message.to_payload()})


def _record(
    db: Session,
    job_name: str,
    plan_id: str,
    result: NotificationResult,
    *,
    request_id: str | None,
    extra: dict,
) -> NotificationResult:
    if result.status == "skipped":
        log_metric("notifications.skipped", 1, metadata={"job": job_name})
    payload = {
        "provider": settings.notifications_provider,
        "result": result.__dict__,
        "extras": extra,
        "request_id": request_id or "",
    }
    record_event(
        db,
        plan_id=_as_uuid(plan_id),
        event_type=EVENT_TYPES[job_name],
        status=result.status,
        payload=payload,
        reason=result.reason,
    )
    return result


def _as_uuid(value: str) -> Optional[UUID]:
    try:
        return UUID(str(value))
    except ValueError:
        return None
