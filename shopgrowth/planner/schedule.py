"""Weekly schedule, worker assignments and time phases."""
from __future__ import annotations

import logging
import math
import re
from typing import List, Optional, Sequence

from shopgrowth.api.schemas.growth_plan import (
    DayPlan,
    TaskCategory,
    TaskItem,
    TimePhase,
    WorkerAssignment,
)
from shopgrowth.planner import templates
from shopgrowth.planner.narrative import (
    caption_suggestions,
    compose_task_reasoning,
    format_rupees,
    review_checklist,
)
from shopgrowth.planner.strategy import (
    PAMPHLETS,
    PARTNERSHIP_MEETINGS,
    PILOT_PROGRAM,
    POSTERS,
    GoalStrategy,
    PlanningContext,
    planned_quantity,
    worker_label,
)

logger = logging.getLogger(__name__)

ALL_WORKERS_LABEL = "All workers"
MAX_PHASE_WEEKS = 4
SOCIAL_KEYWORDS = ("social media", "instagram", "facebook")

AI_PREPARED_KEYWORDS = ("post", "create", "caption", "generate", "write", "draft")
HUMAN_REVIEW_KEYWORDS = ("review", "approve", "check", "update", "analyze", "optimize", "verify")
FALLBACK_TASK = "Continue {business} growth activities"

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def classify_task_category(text: str) -> TaskCategory:
    """Substring keyword rules; AI-Prepared keywords are checked first."""
    lowered = text.lower()
    if any(keyword in lowered for keyword in AI_PREPARED_KEYWORDS):
        return TaskCategory.AI_PREPARED
    if any(keyword in lowered for keyword in HUMAN_REVIEW_KEYWORDS):
        return TaskCategory.HUMAN_REVIEW_REQUIRED
    return TaskCategory.MANUAL_ACTION


def make_task_id(day_name: str, index: int, text: str) -> str:
    slug = _SLUG_RE.sub("-", text[:20].lower()).strip("-") or "task"
    return f"{day_name[:3].lower()}-{index}-{slug}"


def is_social_task(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in SOCIAL_KEYWORDS)


def owner_label_for(slot: templates.OwnerSlot, worker_count: int) -> str:
    """Resolve a template owner slot to the label shown on tasks."""
    if slot == templates.ALL_WORKERS:
        return ALL_WORKERS_LABEL if worker_count > 1 else worker_label(1, worker_count)
    index = min(int(slot), worker_count)
    if index >= 3 and worker_count > 3:
        return f"Workers 3-{worker_count}"
    return worker_label(index, worker_count)


def tasks_per_day_limit(ctx: PlanningContext) -> int:
    if ctx.flags.has_very_limited_time:
        return 1
    if ctx.flags.has_limited_time:
        return 2
    return 0


def _fill(text: str, ctx: PlanningContext) -> str:
    profile = ctx.profile
    return text.format(
        product=profile.product,
        audience=profile.audience,
        venues=profile.venues,
        partners=profile.partners,
        showcase=profile.showcase,
        business=ctx.constraints.business_type,
    )


def _task_item(
    ctx: PlanningContext,
    day_name: str,
    index: int,
    owner: str,
    text: str,
    category: Optional[TaskCategory] = None,
) -> TaskItem:
    category = category or classify_task_category(text)
    return TaskItem(
        id=make_task_id(day_name, index, text),
        text=text,
        owner_label=owner,
        category=category,
        reasoning_text=compose_task_reasoning(text, ctx.constraints, day_name),
        caption_suggestions=(
            caption_suggestions(text, ctx.profile, ctx.constraints, day_name)
            if category is TaskCategory.AI_PREPARED
            else None
        ),
        checklist=review_checklist(text) if category is TaskCategory.HUMAN_REVIEW_REQUIRED else None,
    )


def build_week_schedule(strategy: GoalStrategy, ctx: PlanningContext) -> List[DayPlan]:
    """
    Build the Monday to Friday schedule for one plan.

    Each day is trimmed to the time budget first and social tasks are dropped
    afterwards; the first template row of a day is never social, so the trimmed
    count survives suppression.
    """
    week = strategy.week_template(ctx.workers)
    limit = tasks_per_day_limit(ctx)
    day_plans: List[DayPlan] = []
    for day_name in templates.WEEKDAYS:
        rows = week[day_name]
        if limit:
            rows = rows[:limit]

        texts = []
        for slot, template_text in rows:
            owner = owner_label_for(slot, ctx.workers)
            text = f"{owner}: {_fill(template_text, ctx)}"
            if not ctx.flags.can_do_social_media and is_social_task(text):
                continue
            texts.append((owner, text, None))

        if not texts:
            logger.debug("No tasks left for %s, adding fallback task", day_name)
            owner = worker_label(1, ctx.workers)
            fallback = FALLBACK_TASK.format(business=ctx.constraints.business_type)
            texts.append((owner, f"{owner}: {fallback}", TaskCategory.MANUAL_ACTION))

        tasks = [
            _task_item(ctx, day_name, index, owner, text, category)
            for index, (owner, text, category) in enumerate(texts, start=1)
        ]
        day_plans.append(DayPlan(day_name=day_name, tasks=tasks))
    return day_plans


def build_worker_assignments(
    strategy: GoalStrategy, ctx: PlanningContext, shares: Sequence[float]
) -> List[WorkerAssignment]:
    hours = round(ctx.constraints.time_per_day_hours / ctx.workers, 2)
    assignments: List[WorkerAssignment] = []
    for index in range(1, ctx.workers + 1):
        assignments.append(
            WorkerAssignment(
                worker_label=worker_label(index, ctx.workers),
                tasks=strategy.build_worker_tasks(ctx, index),
                time_per_day_hours=hours,
                budget_share=shares[index - 1],
            )
        )
    return assignments


def build_time_phases(strategy: GoalStrategy, ctx: PlanningContext) -> List[TimePhase]:
    """One phase per week of the target span, at most four; later weeks use the steady-state template."""
    budget = ctx.constraints.monthly_budget
    values = {
        "lead": ctx.owner(1),
        "first": ctx.owner(1),
        "second": ctx.owner(2),
        "pamphlets": planned_quantity(PAMPHLETS, budget),
        "posters": planned_quantity(POSTERS, budget),
        "meeting_budget": format_rupees(min(budget * PARTNERSHIP_MEETINGS.fraction, PARTNERSHIP_MEETINGS.ceiling)),
        "pilot_budget": format_rupees(min(budget * PILOT_PROGRAM.fraction, PILOT_PROGRAM.ceiling)),
    }
    phase_templates = templates.PHASE_TEMPLATES[strategy.goal]
    weeks = min(math.ceil(ctx.constraints.target_span_days / 7), MAX_PHASE_WEEKS)
    phases: List[TimePhase] = []
    for week in range(1, weeks + 1):
        actions, expected = phase_templates.get(week, phase_templates[0])
        phases.append(
            TimePhase(
                period=f"Week {week}",
                actions=[action.format(**values) for action in actions],
                expected_results=expected,
            )
        )
    return phases
