"""Tests for the reminder batch runner and its scheduler wiring."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shopgrowth.core.config import settings
from shopgrowth.db.models.growth_plan import GrowthPlanRecord
from shopgrowth.db.models.plan_event import PlanEvent
from shopgrowth.planner.engine import generate_plan, to_persisted_document
from shopgrowth.services import plan_repository, task_tracker
from shopgrowth.services.notifications.factory import get_notification_service
from shopgrowth.services.reminder_runner import run_reminders_for_all_plans
from shopgrowth.services.stores import InMemoryKeyValueStore
from shopgrowth.worker import scheduler_main


@pytest.fixture()
def db(monkeypatch):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    GrowthPlanRecord.__table__.create(bind=engine)
    PlanEvent.__table__.create(bind=engine)
    monkeypatch.setattr(settings, "notifications_enabled", True)
    monkeypatch.setattr(settings, "notifications_provider", "noop")
    get_notification_service.cache_clear()
    session = TestingSessionLocal()
    yield session
    session.close()
    get_notification_service.cache_clear()


def _store_plan(db, store, raw, created_at) -> str:
    plan = generate_plan(raw)
    document = to_persisted_document(plan, created_at=created_at)
    record = plan_repository.save_plan_document(db, document, growth_goal=plan.constraints.growth_goal.value)
    task_tracker.track_plan_tasks(store, str(record.id), plan)
    return str(record.id)


def test_run_for_all_plans_counts_outcomes(db) -> None:
    store = InMemoryKeyValueStore()
    first = _store_plan(db, store, {"businessType": "bakery", "budget": 1000}, datetime(2026, 10, 1, tzinfo=timezone.utc))
    _store_plan(db, store, {"businessType": "mobile repair", "budget": 300}, datetime(2026, 10, 2, tzinfo=timezone.utc))
    for task in task_tracker.due_tasks(store, first, "Monday"):
        task_tracker.complete_task(store, first, task["id"], completed_at=datetime(2026, 10, 5, tzinfo=timezone.utc))

    result = run_reminders_for_all_plans(db, store, day="Monday")

    assert result.plans_processed == 2
    assert result.reminders_sent == 1
    assert result.skipped == 1
    assert result.failed == 0
    statuses = sorted(event.status for event in db.query(PlanEvent).all())
    assert statuses == ["sent", "skipped"]


def test_run_with_explicit_plan_ids(db) -> None:
    result = run_reminders_for_all_plans(db, InMemoryKeyValueStore(), day="Sunday", plan_ids=["not-a-uuid"])

    assert result.plans_processed == 1
    assert result.skipped == 1
    assert db.query(PlanEvent).one().plan_id is None


class _DummyScheduler:
    def __init__(self):
        self.jobs = []

    def add_job(self, func, **kwargs):
        self.jobs.append((func, kwargs))


def test_register_jobs_adds_weekday_cron(monkeypatch) -> None:
    monkeypatch.setattr(settings, "reminder_hour", 7)
    monkeypatch.setattr(settings, "reminder_minute", 45)
    scheduler = _DummyScheduler()

    scheduler_main.register_jobs(scheduler)

    func, kwargs = scheduler.jobs[0]
    assert func is scheduler_main.run_daily_reminder_job
    assert kwargs["trigger"] == "cron"
    assert kwargs["day_of_week"] == "mon-fri"
    assert (kwargs["hour"], kwargs["minute"]) == (7, 45)
    assert kwargs["id"] == "daily_task_reminders"
