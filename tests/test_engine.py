"""End-to-end tests for plan generation and the persisted projection."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from shopgrowth.api.schemas.growth_plan import BusinessCategory, Constraints, GrowthGoal, TaskCategory
from shopgrowth.planner.engine import generate_plan, to_persisted_document

CREATED_AT = datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc)


def _items(plan):
    return [item.item for item in plan.budget_line_items]


def test_bakery_sales_example() -> None:
    plan = generate_plan(
        {"businessType": "bakery", "budget": 1000, "timePerDay": 3, "numberOfWorkers": 2, "growthGoal": "sales"}
    )

    assert plan.business_category is BusinessCategory.BAKERY
    assert plan.selected_goal == "Increase Sales"
    assert [a.budget_share for a in plan.worker_assignments] == [500, 500]
    assert _items(plan)[:2] == ["Offer Flyers", "Packaging Inserts"]
    monday_text = " ".join(task.text for task in plan.day_plans[0].tasks)
    assert "Worker 1" in monday_text and "Worker 2" in monday_text


def test_tiny_budget_and_time_example() -> None:
    plan = generate_plan({"budget": 40, "timePerDay": 0.5, "numberOfWorkers": 1, "growthGoal": "visibility"})

    assert all(len(day.tasks) == 1 for day in plan.day_plans)
    assert plan.budget_line_items == []
    descriptions = [method.description for method in plan.methods]
    assert "Start word-of-mouth referrals" in descriptions
    assert "Batch the week's growth work into one block" in descriptions


@pytest.mark.parametrize("goal", list(GrowthGoal))
@pytest.mark.parametrize("budget", [0, 40, 99.99, 100, 500, 1000, 2500, 150000])
@pytest.mark.parametrize("business", ["bakery", "mobile repair", "cool drinks", "tailor"])
def test_budget_invariants(goal, budget, business) -> None:
    plan = generate_plan(
        {"businessType": business, "budget": budget, "timePerDay": 3, "numberOfWorkers": 3, "growthGoal": goal.value}
    )

    total = sum(item.total_cost for item in plan.budget_line_items)
    assert total <= budget + 1e-6
    for item in plan.budget_line_items:
        assert item.allocated_cost <= item.ceiling + 1e-9
        assert item.total_cost == pytest.approx(item.allocated_cost + item.absorbed_remainder)
        assert item.quantity >= 0
    assert sum(a.budget_share for a in plan.worker_assignments) == pytest.approx(budget)
    assert sum(method.cost for method in plan.methods) <= budget + 1e-6


def test_zero_budget_still_produces_full_plan() -> None:
    plan = generate_plan({"budget": 0, "timePerDay": 2, "growthGoal": "expansion"})

    assert plan.budget_line_items == []
    assert all(method.cost == 0 for method in plan.methods)
    assert len(plan.day_plans) == 5
    assert plan.time_phases


def test_paid_ads_need_budget_and_social_time() -> None:
    with_ads = generate_plan({"budget": 1000, "timePerDay": 3, "growthGoal": "visibility"})
    no_time = generate_plan({"budget": 1000, "timePerDay": 0.5, "growthGoal": "visibility"})
    no_money = generate_plan({"budget": 400, "timePerDay": 3, "growthGoal": "visibility"})
    expansion = generate_plan({"budget": 5000, "timePerDay": 3, "growthGoal": "expansion"})

    assert "Social Ad Boost" in _items(with_ads)
    assert "Social Ad Boost" not in _items(no_time)
    assert "Social Ad Boost" not in _items(no_money)
    assert "Social Ad Boost" not in _items(expansion)


def test_visibility_allocation_order_and_absorption() -> None:
    plan = generate_plan({"budget": 1000, "timePerDay": 3, "growthGoal": "visibility"})

    assert _items(plan) == ["Pamphlets", "Posters", "Social Ad Boost", "Promotional Materials"]
    last = plan.budget_line_items[-1]
    assert last.allocated_cost == 150
    assert last.absorbed_remainder == pytest.approx(350)
    assert sum(item.total_cost for item in plan.budget_line_items) == pytest.approx(1000)


def test_signature_item_follows_category() -> None:
    plan = generate_plan({"businessType": "bakery", "budget": 2000, "timePerDay": 3, "growthGoal": "expansion"})

    assert "Sampling Event" in _items(plan)
    assert any(method.description.startswith("Organize a small sampling event") for method in plan.methods)


def test_social_methods_absent_without_time() -> None:
    plan = generate_plan({"budget": 1000, "timePerDay": 0.5, "growthGoal": "sales"})

    for method in plan.methods:
        text = f"{method.description} {method.how_text}".lower()
        assert "instagram" not in text and "facebook" not in text and "social media" not in text


def test_generation_is_deterministic() -> None:
    raw = {"businessType": "cool drinks", "budget": 2750.5, "timePerDay": 4, "numberOfWorkers": 4, "growthGoal": "sales"}

    assert generate_plan(raw).model_dump_json() == generate_plan(dict(raw)).model_dump_json()


def test_accepts_normalized_constraints() -> None:
    constraints = Constraints(business_type="bakery", monthly_budget=500, time_per_day_hours=2, worker_count=1)

    plan = generate_plan(constraints)

    assert plan.constraints == constraints
    assert plan.business_category is BusinessCategory.BAKERY


@pytest.mark.parametrize(
    "raw",
    [
        None,
        {},
        {"budget": "lots", "timePerDay": "all day", "numberOfWorkers": "a few", "growthGoal": 3},
        {"budget": float("nan"), "numberOfWorkers": -10, "targetTimeSpan": "forever"},
        {"businessType": 12345, "budget": 1e12, "timePerDay": 1000, "numberOfWorkers": 50},
    ],
)
def test_never_raises_for_odd_input(raw) -> None:
    plan = generate_plan(raw)

    assert len(plan.day_plans) == 5
    assert plan.safety_note


def test_persisted_document_projects_worker_plans() -> None:
    plan = generate_plan(
        {"businessType": "bakery", "budget": 1000, "timePerDay": 3, "numberOfWorkers": 2, "growthGoal": "sales"}
    )

    document = to_persisted_document(plan, user_id=42, created_at=CREATED_AT)

    assert document.business_type is BusinessCategory.BAKERY
    assert document.user_id == "42"
    assert document.created_at == CREATED_AT
    assert document.inputs["monthly_budget"] == 1000
    assert [w.worker for w in document.worker_assignments] == ["Worker 1", "Worker 2"]
    assert document.collaboration_ideas == plan.collaboration_ideas
    for worker in document.worker_assignments:
        assert [day.day for day in worker.weekly_plan] == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
        assert worker.total_budget_allocated == 500
        manual = [t for day in worker.weekly_plan for t in day.tasks if t.category is TaskCategory.MANUAL_ACTION]
        others = [t for day in worker.weekly_plan for t in day.tasks if t.category is not TaskCategory.MANUAL_ACTION]
        assert manual
        assert sum(t.budget_allocated for t in manual) == pytest.approx(500, abs=0.05)
        assert all(t.budget_allocated == 0 for t in others)


def test_persisted_document_includes_shared_tasks() -> None:
    plan = generate_plan({"budget": 900, "timePerDay": 6, "numberOfWorkers": 4, "growthGoal": "visibility"})

    document = to_persisted_document(plan, created_at=CREATED_AT)

    friday_texts = [
        [task.text for task in worker.weekly_plan[-1].tasks] for worker in document.worker_assignments
    ]
    assert all(any(text.startswith("All workers:") for text in texts) for texts in friday_texts)
    # Workers 3 and 4 share the grouped extra row.
    assert any(t.startswith("Workers 3-4:") for t in friday_texts[2])
    assert any(t.startswith("Workers 3-4:") for t in friday_texts[3])
    assert document.user_id is None
