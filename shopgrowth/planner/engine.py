"""Plan assembly: the single entry point used by every call site."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, Mapping, Optional, Union

from shopgrowth.api.schemas.growth_plan import (
    Constraints,
    GrowthPlan,
    PersistedDay,
    PersistedPlanDocument,
    PersistedTask,
    PersistedWorkerPlan,
    TaskCategory,
    TaskItem,
)
from shopgrowth.planner.budget import BudgetLedger, split_worker_budget
from shopgrowth.planner.classifier import category_profile, classify_business, collaboration_ideas
from shopgrowth.planner.constraints import normalize_constraints
from shopgrowth.planner.narrative import (
    SAFETY_NOTE,
    compose_ai_contribution,
    compose_business_summary,
    compose_goal_explanation,
)
from shopgrowth.planner.schedule import (
    ALL_WORKERS_LABEL,
    build_time_phases,
    build_week_schedule,
    build_worker_assignments,
)
from shopgrowth.planner.strategy import PlanningContext, derive_resource_flags, select_strategy

logger = logging.getLogger(__name__)

PlanInput = Union[Constraints, Mapping[str, Any], None]


def generate_plan(source: PlanInput) -> GrowthPlan:
    """
    Build a complete growth plan.

    Accepts either normalized Constraints or a raw submission mapping; raw input
    is normalized first and never causes an error.
    """
    constraints = source if isinstance(source, Constraints) else normalize_constraints(source)
    category = classify_business(constraints.business_type)
    profile = category_profile(category)
    flags = derive_resource_flags(constraints)
    strategy = select_strategy(constraints.growth_goal)

    ledger = BudgetLedger(constraints.monthly_budget)
    shares = split_worker_budget(constraints.monthly_budget, constraints.worker_count)
    ctx = PlanningContext(constraints=constraints, flags=flags, profile=profile, ledger=ledger)

    methods = strategy.build_methods(ctx)
    ledger.absorb_remainder()
    day_plans = build_week_schedule(strategy, ctx)

    logger.debug(
        "Assembled %s plan for %s: %d methods, %d line items",
        strategy.goal.value,
        category.value,
        len(methods),
        len(ledger.items),
    )
    return GrowthPlan(
        business_summary=compose_business_summary(constraints),
        selected_goal=strategy.label,
        goal_explanation=compose_goal_explanation(constraints, flags, profile),
        business_category=category,
        constraints=constraints,
        resource_flags=flags,
        methods=methods,
        budget_line_items=list(ledger.items),
        worker_assignments=build_worker_assignments(strategy, ctx, shares),
        day_plans=day_plans,
        time_phases=build_time_phases(strategy, ctx),
        task_classification=strategy.task_classification(),
        collaboration_ideas=collaboration_ideas(category),
        ai_contribution_summary=compose_ai_contribution(constraints),
        safety_note=SAFETY_NOTE,
    )


def _owns(worker_index: int, worker: str, task: TaskItem) -> bool:
    if task.owner_label in (worker, ALL_WORKERS_LABEL):
        return True
    return worker_index >= 3 and task.owner_label.startswith("Workers 3-")


def to_persisted_document(
    plan: GrowthPlan,
    *,
    user_id: Optional[Any] = None,
    created_at: datetime,
) -> PersistedPlanDocument:
    """Project a plan into the per-worker document kept by the plan store."""
    workers: List[PersistedWorkerPlan] = []
    for index, assignment in enumerate(plan.worker_assignments, start=1):
        owned = [
            (day.day_name, [task for task in day.tasks if _owns(index, assignment.worker_label, task)])
            for day in plan.day_plans
        ]
        manual_count = sum(
            1 for _, tasks in owned for task in tasks if task.category is TaskCategory.MANUAL_ACTION
        )
        per_task = round(assignment.budget_share / manual_count, 2) if manual_count else 0.0

        weekly_plan = [
            PersistedDay(
                day=day_name,
                tasks=[
                    PersistedTask(
                        text=task.text,
                        reasoning=task.reasoning_text,
                        category=task.category,
                        budget_allocated=per_task if task.category is TaskCategory.MANUAL_ACTION else 0.0,
                    )
                    for task in tasks
                ],
            )
            for day_name, tasks in owned
        ]
        workers.append(
            PersistedWorkerPlan(
                worker=assignment.worker_label,
                weekly_plan=weekly_plan,
                total_budget_allocated=assignment.budget_share,
            )
        )

    return PersistedPlanDocument(
        inputs=plan.constraints.model_dump(mode="json"),
        worker_assignments=workers,
        collaboration_ideas=list(plan.collaboration_ideas),
        business_type=plan.business_category,
        user_id=None if user_id is None else str(user_id),
        created_at=created_at,
    )
