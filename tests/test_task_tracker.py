"""Tests for task completion tracking and key/value stores."""
from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shopgrowth.db.models.kv_entry import KeyValueEntry
from shopgrowth.planner.engine import generate_plan
from shopgrowth.services import task_tracker
from shopgrowth.services.stores import InMemoryKeyValueStore, SqlKeyValueStore

PLAN_ID = "3f0c7a52-7a8e-4f61-9a43-0d3e4b7c2a10"
DONE_AT = datetime(2026, 10, 5, 9, 30, tzinfo=timezone.utc)


@pytest.fixture()
def plan():
    return generate_plan({"businessType": "bakery", "budget": 2000, "timePerDay": 3, "numberOfWorkers": 2})


@pytest.fixture()
def sql_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    KeyValueEntry.__table__.create(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


def test_in_memory_store_returns_copies() -> None:
    store = InMemoryKeyValueStore()
    value = [{"completed": False}]
    store.set("k", value)
    value[0]["completed"] = True

    fetched = store.get("k")
    fetched[0]["completed"] = True

    assert store.get("k") == [{"completed": False}]
    assert store.get("missing") is None


def test_sql_store_persists_updates(sql_session) -> None:
    store = SqlKeyValueStore(sql_session)
    store.set("plan:x:tasks", [{"id": "a", "completed": False}])
    store.set("plan:x:tasks", [{"id": "a", "completed": True}])

    assert store.get("plan:x:tasks") == [{"id": "a", "completed": True}]
    assert sql_session.query(KeyValueEntry).count() == 1


@pytest.mark.parametrize(
    "raw, expected",
    [("monday", "Monday"), ("FRI", "Friday"), (" Wed ", "Wednesday"), ("funday", None), ("", None), (None, None)],
)
def test_normalize_day(raw, expected) -> None:
    assert task_tracker.normalize_day(raw) == expected


def test_weekday_name() -> None:
    assert task_tracker.weekday_name(date(2026, 10, 5)) == "Monday"
    assert task_tracker.weekday_name(date(2026, 10, 11)) == "Sunday"


def test_track_plan_tasks_covers_every_scheduled_task(plan) -> None:
    store = InMemoryKeyValueStore()

    count = task_tracker.track_plan_tasks(store, PLAN_ID, plan)

    assert count == sum(len(day.tasks) for day in plan.day_plans)
    tracked = task_tracker.list_tasks(store, PLAN_ID)
    assert [task["id"] for task in tracked] == [task.id for day in plan.day_plans for task in day.tasks]
    assert {task["day"] for task in tracked} == {day.day_name for day in plan.day_plans}


def test_list_tasks_for_untracked_plan_is_none() -> None:
    assert task_tracker.list_tasks(InMemoryKeyValueStore(), PLAN_ID) is None
    assert task_tracker.due_tasks(InMemoryKeyValueStore(), PLAN_ID, "Monday") == []


def test_complete_task_is_idempotent(plan) -> None:
    store = InMemoryKeyValueStore()
    task_tracker.track_plan_tasks(store, PLAN_ID, plan)
    task_id = plan.day_plans[0].tasks[0].id

    first = task_tracker.complete_task(store, PLAN_ID, task_id, completed_at=DONE_AT)
    again = task_tracker.complete_task(
        store, PLAN_ID, task_id, completed_at=datetime(2026, 10, 6, tzinfo=timezone.utc)
    )

    assert first["completed"] is True
    assert again["completed_at"] == DONE_AT.isoformat()
    open_ids = [task["id"] for task in task_tracker.due_tasks(store, PLAN_ID, "Monday")]
    assert task_id not in open_ids
    everything = task_tracker.list_tasks(store, PLAN_ID, day="Monday", include_completed=True)
    assert task_id in [task["id"] for task in everything]


def test_complete_unknown_task_returns_none(plan) -> None:
    store = InMemoryKeyValueStore()
    task_tracker.track_plan_tasks(store, PLAN_ID, plan)

    assert task_tracker.complete_task(store, PLAN_ID, "nope", completed_at=DONE_AT) is None
    assert task_tracker.complete_task(store, "other-plan", "nope", completed_at=DONE_AT) is None
