"""Input normalization for raw plan submissions."""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, Optional, Tuple

from shopgrowth.api.schemas.growth_plan import Constraints, GrowthGoal

logger = logging.getLogger(__name__)

DEFAULT_BUSINESS_TYPE = "business"
DEFAULT_BUDGET = 0.0
DEFAULT_TIME_PER_DAY = 0.0
DEFAULT_WORKERS = 1
DEFAULT_SPAN_DAYS = 30
MAX_HOURS_PER_DAY = 24.0
MAX_WORKERS = 50

_FIELD_KEYS: Dict[str, Tuple[str, ...]] = {
    "business_type": ("businessType", "business_type"),
    "monthly_budget": ("budget", "monthlyBudget", "monthly_budget"),
    "time_per_day_hours": ("timePerDay", "timePerDayHours", "time_per_day", "time_per_day_hours"),
    "worker_count": ("numberOfWorkers", "workerCount", "workers", "worker_count"),
    "growth_goal": ("growthGoal", "growth_goal"),
    "target_span_days": ("targetTimeSpan", "targetSpanDays", "target_span_days"),
}


def normalize_constraints(raw: Optional[Mapping[str, Any]]) -> Constraints:
    """
    Coerce a raw submission into Constraints.

    Never raises: anything unparseable falls back to its default.
    """
    source = raw if isinstance(raw, Mapping) else {}

    budget = _parse_float(_pick(source, "monthly_budget"), DEFAULT_BUDGET, "monthly_budget")
    hours = _parse_float(_pick(source, "time_per_day_hours"), DEFAULT_TIME_PER_DAY, "time_per_day_hours")
    workers = _parse_int(_pick(source, "worker_count"), DEFAULT_WORKERS, "worker_count")
    span = _parse_int(_pick(source, "target_span_days"), DEFAULT_SPAN_DAYS, "target_span_days")

    if workers < 1:
        logger.debug("worker_count=%s below 1; using %s", workers, DEFAULT_WORKERS)
        workers = DEFAULT_WORKERS
    elif workers > MAX_WORKERS:
        logger.debug("worker_count=%s above %s; clamping", workers, MAX_WORKERS)
        workers = MAX_WORKERS
    if span < 1:
        logger.debug("target_span_days=%s below 1; using %s", span, DEFAULT_SPAN_DAYS)
        span = DEFAULT_SPAN_DAYS

    return Constraints(
        business_type=_parse_business_type(_pick(source, "business_type")),
        monthly_budget=round(max(budget, 0.0), 2),
        time_per_day_hours=min(max(hours, 0.0), MAX_HOURS_PER_DAY),
        worker_count=workers,
        growth_goal=parse_goal(_pick(source, "growth_goal")),
        target_span_days=span,
    )


def parse_goal(value: Any) -> GrowthGoal:
    if isinstance(value, GrowthGoal):
        return value
    if isinstance(value, str):
        try:
            return GrowthGoal(value.strip().lower())
        except ValueError:
            pass
    if value not in (None, ""):
        logger.debug("Unknown growth goal %r; using %s", value, GrowthGoal.VISIBILITY.value)
    return GrowthGoal.VISIBILITY


def _pick(source: Mapping[str, Any], field: str) -> Any:
    for key in _FIELD_KEYS[field]:
        value = source.get(key)
        if value is not None:
            return value
    return None


def _parse_business_type(value: Any) -> str:
    if value is None:
        return DEFAULT_BUSINESS_TYPE
    text = str(value).strip().lower()
    return text or DEFAULT_BUSINESS_TYPE


def _to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _parse_float(value: Any, default: float, field: str) -> float:
    number = _to_number(value)
    if number is None:
        if value not in (None, ""):
            logger.debug("Could not parse %s=%r; using %s", field, value, default)
        return default
    return number


def _parse_int(value: Any, default: int, field: str) -> int:
    number = _to_number(value)
    if number is None:
        if value not in (None, ""):
            logger.debug("Could not parse %s=%r; using %s", field, value, default)
        return default
    return int(math.floor(number))
