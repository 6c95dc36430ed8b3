"""Tests for the weekly schedule, task categories and worker assignments."""
from __future__ import annotations

import pytest

from shopgrowth.api.schemas.growth_plan import TaskCategory
from shopgrowth.planner.engine import generate_plan
from shopgrowth.planner.schedule import classify_task_category, make_task_id, owner_label_for
from shopgrowth.planner.templates import ALL_WORKERS, WEEKDAYS

SOCIAL_WORDS = ("social media", "instagram", "facebook")


def _plan(**overrides):
    raw = {
        "businessType": "bakery",
        "budget": 1000,
        "timePerDay": 3,
        "numberOfWorkers": 2,
        "growthGoal": "sales",
        "targetTimeSpan": 30,
    }
    raw.update(overrides)
    return generate_plan(raw)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Post today's offer on Instagram", TaskCategory.AI_PREPARED),
        ("Write a product description", TaskCategory.AI_PREPARED),
        ("Draft and review the proposal", TaskCategory.AI_PREPARED),
        ("Review pending orders", TaskCategory.HUMAN_REVIEW_REQUIRED),
        ("Verify partner pricing", TaskCategory.HUMAN_REVIEW_REQUIRED),
        ("Place posters near the market", TaskCategory.AI_PREPARED),
        ("Optimize the Google Business Profile", TaskCategory.HUMAN_REVIEW_REQUIRED),
        ("Ask customers for Google reviews", TaskCategory.HUMAN_REVIEW_REQUIRED),
        ("Update the price board", TaskCategory.HUMAN_REVIEW_REQUIRED),
        ("Distribute pamphlets", TaskCategory.MANUAL_ACTION),
    ],
)
def test_classify_task_category(text, expected) -> None:
    assert classify_task_category(text) is expected


def test_template_tasks_classified_by_contained_keywords() -> None:
    plan = _plan(growthGoal="visibility", numberOfWorkers=2)

    tuesday = {task.text: task.category for task in plan.day_plans[1].tasks}
    posters = [text for text in tuesday if "Place posters" in text]

    assert posters and posters[0].startswith("Worker 2:")
    assert tuesday[posters[0]] is TaskCategory.AI_PREPARED
    pamphlets = [task for task in plan.day_plans[0].tasks if "Distribute pamphlets" in task.text]
    assert pamphlets and pamphlets[0].category is TaskCategory.MANUAL_ACTION


def test_make_task_id() -> None:
    assert make_task_id("Monday", 1, "You: Optimize the Google profile") == "mon-1-you-optimize-the-go"
    assert make_task_id("Friday", 3, "!!!") == "fri-3-task"


def test_owner_labels() -> None:
    assert owner_label_for(1, 1) == "You"
    assert owner_label_for(2, 1) == "You"
    assert owner_label_for(2, 2) == "Worker 2"
    assert owner_label_for(3, 3) == "Worker 3"
    assert owner_label_for(3, 5) == "Workers 3-5"
    assert owner_label_for(ALL_WORKERS, 4) == "All workers"


@pytest.mark.parametrize("goal", ["visibility", "sales", "expansion"])
@pytest.mark.parametrize("workers", [1, 2, 3, 6])
def test_schedule_covers_weekdays_only(goal, workers) -> None:
    plan = _plan(growthGoal=goal, numberOfWorkers=workers)

    assert [day.day_name for day in plan.day_plans] == list(WEEKDAYS)
    assert all(day.tasks for day in plan.day_plans)


@pytest.mark.parametrize("hours, per_day", [(0, 1), (0.5, 1), (0.99, 1), (1.5, 2), (1.99, 2)])
@pytest.mark.parametrize("goal", ["visibility", "sales", "expansion"])
def test_time_trimming(hours, per_day, goal) -> None:
    plan = _plan(timePerDay=hours, growthGoal=goal, numberOfWorkers=1)

    assert all(len(day.tasks) == per_day for day in plan.day_plans)


@pytest.mark.parametrize("goal", ["visibility", "sales", "expansion"])
@pytest.mark.parametrize("workers", [1, 2, 3])
def test_social_tasks_suppressed_without_time(goal, workers) -> None:
    plan = _plan(timePerDay=0.5, growthGoal=goal, numberOfWorkers=workers)

    assert plan.resource_flags.can_do_social_media is False
    for day in plan.day_plans:
        for task in day.tasks:
            assert not any(word in task.text.lower() for word in SOCIAL_WORDS)


def test_solo_owner_is_addressed_as_you() -> None:
    plan = _plan(numberOfWorkers=1)

    owners = {task.owner_label for day in plan.day_plans for task in day.tasks}
    assert owners == {"You"}
    assert plan.day_plans[0].tasks[0].text.startswith("You: ")


def test_two_workers_share_monday() -> None:
    plan = _plan()
    monday = plan.day_plans[0]

    texts = " ".join(task.text for task in monday.tasks)
    assert "Worker 1" in texts
    assert "Worker 2" in texts


def test_three_workers_add_row_and_friday_sync() -> None:
    plan = _plan(numberOfWorkers=3)
    monday, friday = plan.day_plans[0], plan.day_plans[-1]

    assert len(monday.tasks) == 4
    assert monday.tasks[-1].owner_label == "Worker 3"
    assert len(friday.tasks) == 5
    assert friday.tasks[-1].owner_label == "All workers"
    assert "sync" in friday.tasks[-1].text.lower()


def test_large_team_groups_extra_workers() -> None:
    plan = _plan(numberOfWorkers=5, timePerDay=8)

    assert plan.day_plans[0].tasks[-1].owner_label == "Workers 3-5"


def test_task_ids_are_unique_within_a_plan() -> None:
    plan = _plan(numberOfWorkers=4)

    ids = [task.id for day in plan.day_plans for task in day.tasks]
    assert len(ids) == len(set(ids))
    assert all(task_id[:3] in {"mon", "tue", "wed", "thu", "fri"} for task_id in ids)


def test_task_extras_follow_category() -> None:
    plan = _plan(numberOfWorkers=1)

    for day in plan.day_plans:
        for task in day.tasks:
            if task.category is TaskCategory.AI_PREPARED:
                assert task.caption_suggestions and len(task.caption_suggestions) == 3
            else:
                assert task.caption_suggestions is None
            if task.category is TaskCategory.HUMAN_REVIEW_REQUIRED:
                assert task.checklist
            else:
                assert task.checklist is None


def test_worker_assignments_split_time_and_budget() -> None:
    plan = _plan(budget=1001, timePerDay=3, numberOfWorkers=2)

    assert [a.worker_label for a in plan.worker_assignments] == ["Worker 1", "Worker 2"]
    assert [a.budget_share for a in plan.worker_assignments] == [501, 500]
    assert sum(a.time_per_day_hours for a in plan.worker_assignments) == pytest.approx(3)
    assert all(a.tasks for a in plan.worker_assignments)


def test_worker_task_minutes_are_capped_by_available_time() -> None:
    plan = _plan(growthGoal="visibility", timePerDay=1, numberOfWorkers=2)

    # 30 minutes per worker caps the 120 minute profile task.
    assert plan.worker_assignments[0].tasks[0] == "Optimize Google Business Profile (30 min on Day 1-2)"


@pytest.mark.parametrize("span, weeks", [(1, 1), (7, 1), (10, 2), (21, 3), (30, 4), (90, 4)])
def test_time_phase_count(span, weeks) -> None:
    plan = _plan(targetTimeSpan=span)

    assert [phase.period for phase in plan.time_phases] == [f"Week {n}" for n in range(1, weeks + 1)]


def test_expansion_phases_mention_meeting_budget() -> None:
    plan = _plan(growthGoal="expansion", budget=1000)

    assert any("₹300" in action for action in plan.time_phases[1].actions)
