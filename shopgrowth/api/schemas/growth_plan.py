"""Schemas for growth plans produced by the planning engine."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class GrowthGoal(str, Enum):
    VISIBILITY = "visibility"
    SALES = "sales"
    EXPANSION = "expansion"


class BusinessCategory(str, Enum):
    BAKERY = "bakery"
    REPAIR_SHOP = "repair-shop"
    COOL_DRINKS = "cool-drinks"
    OTHER = "other"


class TaskCategory(str, Enum):
    AI_PREPARED = "AI-Prepared"
    HUMAN_REVIEW_REQUIRED = "Human-Review-Required"
    MANUAL_ACTION = "Manual-Action"


class Constraints(BaseModel):
    """Normalized inputs for one planning run."""

    model_config = ConfigDict(frozen=True)

    business_type: str = "business"
    monthly_budget: float = Field(default=0.0, ge=0)
    time_per_day_hours: float = Field(default=0.0, ge=0, le=24)
    worker_count: int = Field(default=1, ge=1, le=50)
    growth_goal: GrowthGoal = GrowthGoal.VISIBILITY
    target_span_days: int = Field(default=30, ge=1)


class ResourceFlags(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_low_budget: bool
    has_limited_time: bool
    has_very_limited_time: bool
    can_do_social_media: bool


class Action(BaseModel):
    description: str
    how_text: str
    owner_label: str
    cost: float = Field(default=0.0, ge=0)
    location_text: Optional[str] = None
    timing_text: str


class BudgetLineItem(BaseModel):
    """
    One costed row of the budget breakdown.

    ``ceiling`` bounds ``allocated_cost``; ``total_cost`` also carries any
    ``absorbed_remainder`` and may exceed the ceiling.
    """

    item: str
    quantity: int = Field(..., ge=0)
    unit_cost: float = Field(..., ge=0)
    total_cost: float
    purpose: str
    ceiling: float
    allocated_cost: float
    absorbed_remainder: float = 0.0


class WorkerAssignment(BaseModel):
    worker_label: str
    tasks: List[str]
    time_per_day_hours: float
    budget_share: float


class TaskItem(BaseModel):
    id: str
    text: str
    owner_label: str
    category: TaskCategory
    reasoning_text: str
    caption_suggestions: Optional[List[str]] = None
    checklist: Optional[List[str]] = None


class DayPlan(BaseModel):
    day_name: str
    tasks: List[TaskItem]


class TimePhase(BaseModel):
    period: str
    actions: List[str]
    expected_results: str


class TaskClassification(BaseModel):
    automated: List[str]
    ai_assisted: List[str]
    human_only: List[str]


class GrowthPlan(BaseModel):
    """Complete output of one planning run."""

    model_config = ConfigDict(frozen=True)

    business_summary: str
    selected_goal: str
    goal_explanation: str
    business_category: BusinessCategory
    constraints: Constraints
    resource_flags: ResourceFlags
    methods: List[Action]
    budget_line_items: List[BudgetLineItem]
    worker_assignments: List[WorkerAssignment]
    day_plans: List[DayPlan]
    time_phases: List[TimePhase]
    task_classification: TaskClassification
    collaboration_ideas: List[str]
    ai_contribution_summary: str
    safety_note: str


class PersistedTask(BaseModel):
    text: str
    reasoning: str
    category: TaskCategory
    budget_allocated: float = 0.0


class PersistedDay(BaseModel):
    day: str
    tasks: List[PersistedTask]


class PersistedWorkerPlan(BaseModel):
    worker: str
    weekly_plan: List[PersistedDay]
    total_budget_allocated: float


class PersistedPlanDocument(BaseModel):
    """Simpler projection of a plan, as written to the plan store."""

    inputs: Dict[str, Any]
    worker_assignments: List[PersistedWorkerPlan]
    collaboration_ideas: List[str]
    business_type: BusinessCategory
    user_id: Optional[str] = None
    created_at: datetime


class PlanRequest(BaseModel):
    """Raw constraint submission; values are coerced by the normalizer, not here."""

    model_config = ConfigDict(extra="allow")

    user_id: Optional[Any] = Field(default=None, validation_alias=AliasChoices("user_id", "userId"))
    business_type: Optional[Any] = Field(default=None, validation_alias=AliasChoices("businessType", "business_type"))
    budget: Optional[Any] = Field(default=None, validation_alias=AliasChoices("budget", "monthlyBudget", "monthly_budget"))
    time_per_day: Optional[Any] = Field(default=None, validation_alias=AliasChoices("timePerDay", "time_per_day"))
    number_of_workers: Optional[Any] = Field(
        default=None, validation_alias=AliasChoices("numberOfWorkers", "workerCount", "worker_count")
    )
    growth_goal: Optional[Any] = Field(default=None, validation_alias=AliasChoices("growthGoal", "growth_goal"))
    target_time_span: Optional[Any] = Field(
        default=None, validation_alias=AliasChoices("targetTimeSpan", "targetSpanDays", "target_span_days")
    )

    def raw_constraints(self) -> Dict[str, Any]:
        raw = {
            "businessType": self.business_type,
            "budget": self.budget,
            "timePerDay": self.time_per_day,
            "numberOfWorkers": self.number_of_workers,
            "growthGoal": self.growth_goal,
            "targetTimeSpan": self.target_time_span,
        }
        for key, value in (self.model_extra or {}).items():
            raw.setdefault(key, value)
        return {key: value for key, value in raw.items() if value is not None}


class PlanPreviewResponse(BaseModel):
    plan: GrowthPlan
    request_id: str


class PlanCreatedResponse(BaseModel):
    plan_id: str
    plan: GrowthPlan
    request_id: str


class StoredPlanResponse(BaseModel):
    plan_id: str
    document: PersistedPlanDocument


class PlansByCategoryResponse(BaseModel):
    role: str = "investor"
    plans_by_type: Dict[str, List[StoredPlanResponse]]
    total_plans: int
