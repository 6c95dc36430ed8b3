"""Growth plan endpoints: preview, persist, fetch and task tracking."""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from time import perf_counter
from typing import Optional, Union
from zoneinfo import ZoneInfo

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session, sessionmaker

from shopgrowth.api.schemas.growth_plan import (
    BusinessCategory,
    PlanCreatedResponse,
    PlanPreviewResponse,
    PlanRequest,
    PlansByCategoryResponse,
    StoredPlanResponse,
)
from shopgrowth.api.schemas.plan_tasks import (
    ReminderRunResponse,
    TaskCompleteResponse,
    TaskListResponse,
    TrackedTask,
)
from shopgrowth.core.config import settings
from shopgrowth.core.context import bind_plan_id
from shopgrowth.db.deps import get_db, get_session_factory
from shopgrowth.db.models.growth_plan import GrowthPlanRecord
from shopgrowth.observability.metrics import log_metric
from shopgrowth.observability.tracing import trace
from shopgrowth.planner.classifier import classify_business
from shopgrowth.planner.engine import generate_plan, to_persisted_document
from shopgrowth.services import plan_repository, task_tracker
from shopgrowth.services.notifications.hooks import dispatch_plan_ready
from shopgrowth.services.reminder_runner import run_reminders_for_plan
from shopgrowth.services.stores import KeyValueStore, SqlKeyValueStore

router = APIRouter()

INVESTOR_CATEGORIES = (BusinessCategory.BAKERY, BusinessCategory.REPAIR_SHOP, BusinessCategory.COOL_DRINKS)


def get_task_store(db: Session = Depends(get_db)) -> KeyValueStore:
    return SqlKeyValueStore(db)


async def _processing_delay() -> None:
    if settings.plan_processing_delay_ms > 0:
        await asyncio.sleep(settings.plan_processing_delay_ms / 1000)


def _stored_response(record: GrowthPlanRecord) -> StoredPlanResponse:
    return StoredPlanResponse(plan_id=str(record.id), document=plan_repository.to_document(record))


def _require_plan(db: Session, plan_id: str) -> GrowthPlanRecord:
    record = plan_repository.load_plan(db, plan_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found")
    return record


@router.post("/plans/preview", response_model=PlanPreviewResponse, tags=["plans"])
async def preview_plan(request: Request, payload: PlanRequest) -> PlanPreviewResponse:
    request_id = getattr(request.state, "request_id", None)
    raw = payload.raw_constraints()
    start = perf_counter()
    with trace("plans.preview", metadata={"inputs": raw}, request_id=request_id):
        await _processing_delay()
        plan = generate_plan(raw)

    log_metric("plans.preview.success", 1, metadata={"goal": plan.constraints.growth_goal.value})
    log_metric("plans.preview.latency_ms", (perf_counter() - start) * 1000)
    return PlanPreviewResponse(plan=plan, request_id=request_id or "")


@router.post(
    "/plans",
    response_model=PlanCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["plans"],
)
async def create_plan(
    request: Request,
    payload: PlanRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    store: KeyValueStore = Depends(get_task_store),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> PlanCreatedResponse:
    request_id = getattr(request.state, "request_id", None)
    raw = payload.raw_constraints()
    start = perf_counter()
    with trace("plans.create", metadata={"inputs": raw}, request_id=request_id):
        await _processing_delay()
        plan = generate_plan(raw)
        document = to_persisted_document(plan, user_id=payload.user_id, created_at=datetime.now(timezone.utc))
        record = plan_repository.save_plan_document(db, document, growth_goal=plan.constraints.growth_goal.value)
        plan_id = str(record.id)
        with bind_plan_id(plan_id):
            task_count = task_tracker.track_plan_tasks(store, plan_id, plan)

    background_tasks.add_task(
        dispatch_plan_ready,
        session_factory,
        plan_id=plan_id,
        business_category=plan.business_category.value,
        goal_label=plan.selected_goal,
        task_count=task_count,
        request_id=request_id,
    )
    log_metric("plans.create.success", 1, metadata={"category": plan.business_category.value})
    log_metric("plans.create.latency_ms", (perf_counter() - start) * 1000)
    return PlanCreatedResponse(plan_id=plan_id, plan=plan, request_id=request_id or "")


@router.get(
    "/plans/latest",
    response_model=Union[PlansByCategoryResponse, StoredPlanResponse],
    tags=["plans"],
)
def latest_plan(
    request: Request,
    role: str = Query("vendor", description="vendor, investor or any"),
    business_type: Optional[str] = Query(None),
    db: Session = Depends(get_db),
) -> Union[PlansByCategoryResponse, StoredPlanResponse]:
    request_id = getattr(request.state, "request_id", None)
    role = role.lower()
    with trace("plans.latest", metadata={"role": role, "business_type": business_type}, request_id=request_id):
        if role == "investor":
            grouped = plan_repository.plans_by_category(db)
            plans_by_type = {category.value: [] for category in INVESTOR_CATEGORIES}
            for category, records in grouped.items():
                plans_by_type[category] = [_stored_response(record) for record in records]
            total = sum(len(records) for records in grouped.values())
            log_metric("plans.latest.investor", total)
            return PlansByCategoryResponse(plans_by_type=plans_by_type, total_plans=total)

        category = None
        if role == "vendor" and business_type:
            classified = classify_business(business_type)
            if classified is not BusinessCategory.OTHER:
                category = classified
        record = plan_repository.load_latest_plan(db, category)

    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No plans stored yet")
    return _stored_response(record)


@router.get("/plans/{plan_id}", response_model=StoredPlanResponse, tags=["plans"])
def get_plan(plan_id: str, db: Session = Depends(get_db)) -> StoredPlanResponse:
    return _stored_response(_require_plan(db, plan_id))


@router.get("/plans/{plan_id}/tasks", response_model=TaskListResponse, tags=["plans"])
def list_plan_tasks(
    plan_id: str,
    day: Optional[str] = Query(None, description="Weekday name, e.g. Monday"),
    db: Session = Depends(get_db),
    store: KeyValueStore = Depends(get_task_store),
) -> TaskListResponse:
    record = _require_plan(db, plan_id)
    day_name = _parse_day(day)
    tasks = task_tracker.list_tasks(store, str(record.id), day=day_name)
    if tasks is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan has no tracked tasks")
    return TaskListResponse(plan_id=str(record.id), day=day_name, tasks=[TrackedTask(**task) for task in tasks])


@router.post("/plans/{plan_id}/tasks/{task_id}/complete", response_model=TaskCompleteResponse, tags=["plans"])
def complete_plan_task(
    request: Request,
    plan_id: str,
    task_id: str,
    db: Session = Depends(get_db),
    store: KeyValueStore = Depends(get_task_store),
) -> TaskCompleteResponse:
    request_id = getattr(request.state, "request_id", None)
    record = _require_plan(db, plan_id)
    with bind_plan_id(str(record.id)), trace("plans.task_complete", metadata={"task_id": task_id}, request_id=request_id):
        task = task_tracker.complete_task(store, str(record.id), task_id, completed_at=datetime.now(timezone.utc))
        if task is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
        plan_repository.record_event(
            db,
            plan_id=record.id,
            event_type="task_completed",
            status="done",
            payload={"task_id": task_id, "request_id": request_id or ""},
        )
    log_metric("plans.task_complete.success", 1)
    return TaskCompleteResponse(plan_id=str(record.id), task=TrackedTask(**task), request_id=request_id or "")


@router.post("/plans/{plan_id}/reminders/run", response_model=ReminderRunResponse, tags=["plans"])
def run_plan_reminders(
    request: Request,
    plan_id: str,
    day: Optional[str] = Query(None, description="Weekday to remind about; defaults to today"),
    db: Session = Depends(get_db),
    store: KeyValueStore = Depends(get_task_store),
) -> ReminderRunResponse:
    request_id = getattr(request.state, "request_id", None)
    record = _require_plan(db, plan_id)
    day_name = _parse_day(day) or task_tracker.weekday_name(
        datetime.now(ZoneInfo(settings.scheduler_timezone)).date()
    )
    due = task_tracker.due_tasks(store, str(record.id), day_name)
    result = run_reminders_for_plan(db, store, str(record.id), day=day_name, request_id=request_id)
    return ReminderRunResponse(
        plan_id=str(record.id),
        day=day_name,
        due_tasks=len(due),
        status=result.status,
        reason=result.reason,
        request_id=request_id or "",
    )


def _parse_day(day: Optional[str]) -> Optional[str]:
    if day is None:
        return None
    day_name = task_tracker.normalize_day(day)
    if day_name is None:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"Unknown day: {day}")
    return day_name
