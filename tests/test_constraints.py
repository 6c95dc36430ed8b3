"""Tests for raw input normalization."""
from __future__ import annotations

import math

import pytest

from shopgrowth.api.schemas.growth_plan import GrowthGoal
from shopgrowth.planner.constraints import MAX_WORKERS, normalize_constraints, parse_goal


def test_camel_case_submission_is_normalized() -> None:
    constraints = normalize_constraints(
        {
            "businessType": "  Bakery ",
            "budget": "1000",
            "timePerDay": "3",
            "numberOfWorkers": "2",
            "growthGoal": "sales",
            "targetTimeSpan": "14",
        }
    )

    assert constraints.business_type == "bakery"
    assert constraints.monthly_budget == 1000
    assert constraints.time_per_day_hours == 3
    assert constraints.worker_count == 2
    assert constraints.growth_goal is GrowthGoal.SALES
    assert constraints.target_span_days == 14


def test_snake_case_keys_are_accepted() -> None:
    constraints = normalize_constraints(
        {"business_type": "repair shop", "monthly_budget": 250, "time_per_day_hours": 1.5, "worker_count": 3}
    )

    assert constraints.business_type == "repair shop"
    assert constraints.monthly_budget == 250
    assert constraints.time_per_day_hours == 1.5
    assert constraints.worker_count == 3


@pytest.mark.parametrize("raw", [None, {}, "not a mapping", 42])
def test_missing_input_uses_defaults(raw) -> None:
    constraints = normalize_constraints(raw)

    assert constraints.business_type == "business"
    assert constraints.monthly_budget == 0
    assert constraints.time_per_day_hours == 0
    assert constraints.worker_count == 1
    assert constraints.growth_goal is GrowthGoal.VISIBILITY
    assert constraints.target_span_days == 30


@pytest.mark.parametrize("bad", ["abc", "", math.nan, math.inf, -math.inf, True, [1], {"x": 1}])
def test_unparseable_numbers_fall_back(bad) -> None:
    constraints = normalize_constraints(
        {"budget": bad, "timePerDay": bad, "numberOfWorkers": bad, "targetTimeSpan": bad}
    )

    assert constraints.monthly_budget == 0
    assert constraints.time_per_day_hours == 0
    assert constraints.worker_count == 1
    assert constraints.target_span_days == 30


def test_out_of_range_values_are_clamped() -> None:
    constraints = normalize_constraints(
        {"budget": -50, "timePerDay": 30, "numberOfWorkers": 0, "targetTimeSpan": -7}
    )

    assert constraints.monthly_budget == 0
    assert constraints.time_per_day_hours == 24
    assert constraints.worker_count == 1
    assert constraints.target_span_days == 30


@pytest.mark.parametrize("workers, expected", [(MAX_WORKERS, MAX_WORKERS), (51, MAX_WORKERS), ("1e9", MAX_WORKERS), (10**12, MAX_WORKERS)])
def test_worker_count_is_capped(workers, expected) -> None:
    assert normalize_constraints({"numberOfWorkers": workers}).worker_count == expected


def test_negative_time_clamps_to_zero_and_fractional_workers_floor() -> None:
    constraints = normalize_constraints({"timePerDay": -2, "numberOfWorkers": 2.7})

    assert constraints.time_per_day_hours == 0
    assert constraints.worker_count == 2


def test_blank_business_type_defaults() -> None:
    assert normalize_constraints({"businessType": "   "}).business_type == "business"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("SALES", GrowthGoal.SALES),
        (" expansion ", GrowthGoal.EXPANSION),
        ("visibility", GrowthGoal.VISIBILITY),
        ("world domination", GrowthGoal.VISIBILITY),
        (None, GrowthGoal.VISIBILITY),
        (7, GrowthGoal.VISIBILITY),
    ],
)
def test_parse_goal(value, expected) -> None:
    assert parse_goal(value) is expected
