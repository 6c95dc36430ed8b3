"""Goal strategy selection: methods, spend items, templates and task lists per goal."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from shopgrowth.api.schemas.growth_plan import (
    Action,
    BudgetLineItem,
    Constraints,
    GrowthGoal,
    ResourceFlags,
    TaskClassification,
)
from shopgrowth.planner.budget import BudgetLedger, SpendItemSpec, quantity_for
from shopgrowth.planner.classifier import CategoryProfile
from shopgrowth.planner.narrative import format_rupees, goal_label
from shopgrowth.planner import templates

LOW_BUDGET_THRESHOLD = 100
LIMITED_TIME_HOURS = 2
VERY_LIMITED_TIME_HOURS = 1
PAID_ADS_BUDGET_FLOOR = 500

PAMPHLETS = SpendItemSpec("Pamphlets", 0.3, 200, 0.4, 50, "Physical awareness distribution")
POSTERS = SpendItemSpec("Posters", 0.2, 150, 15, 30, "Static visibility in high-traffic areas")
OFFER_FLYERS = SpendItemSpec("Offer Flyers", 0.4, 300, 0.5, 100, "Promote limited-time offers to drive immediate sales")
PACKAGING_INSERTS = SpendItemSpec("Packaging Inserts", 1.0, 200, 0.3, 50, "Upsell and repeat purchase incentives")
PARTNERSHIP_MEETINGS = SpendItemSpec(
    "Partnership Meetings", 0.3, 500, 0, 200, "Establish collaboration agreements", fixed_quantity=2
)
PILOT_PROGRAM = SpendItemSpec("Pilot Program", 0.2, 300, 0, 100, "Test expansion feasibility", fixed_quantity=1)
SOCIAL_AD_BOOST = SpendItemSpec("Social Ad Boost", 0.25, 400, 50, 100, "Boosted local posts on Instagram and Facebook")


def derive_resource_flags(constraints: Constraints) -> ResourceFlags:
    hours = constraints.time_per_day_hours
    very_limited = hours < VERY_LIMITED_TIME_HOURS
    return ResourceFlags(
        is_low_budget=constraints.monthly_budget < LOW_BUDGET_THRESHOLD,
        has_limited_time=hours < LIMITED_TIME_HOURS,
        has_very_limited_time=very_limited,
        can_do_social_media=(
            hours >= VERY_LIMITED_TIME_HOURS and constraints.worker_count >= 1 and not very_limited
        ),
    )


def planned_quantity(spec: SpendItemSpec, budget: float) -> int:
    """Units an item would buy from the full budget, used in worker task wording."""
    return quantity_for(min(budget * spec.fraction, spec.ceiling), spec.unit_cost)


def worker_label(index: int, worker_count: int) -> str:
    """Label for the 1-based worker ``index``; a solo owner is always 'You'."""
    if worker_count <= 1:
        return "You"
    return f"Worker {index}"


@dataclass
class PlanningContext:
    constraints: Constraints
    flags: ResourceFlags
    profile: CategoryProfile
    ledger: BudgetLedger

    @property
    def workers(self) -> int:
        return self.constraints.worker_count

    @property
    def minutes_per_worker(self) -> float:
        return self.constraints.time_per_day_hours * 60 / self.workers

    def owner(self, index: int) -> str:
        if index > self.workers:
            index = self.workers
        return worker_label(index, self.workers)

    def capped_minutes(self, ceiling: int) -> int:
        return int(min(self.minutes_per_worker, ceiling))


MethodBuilder = Callable[[PlanningContext], List[Action]]
WorkerTaskBuilder = Callable[[PlanningContext, int], List[str]]


@dataclass(frozen=True)
class GoalStrategy:
    goal: GrowthGoal
    solo_template: templates.WeekTemplate
    pair_template: templates.WeekTemplate
    third_worker_rows: Dict[str, templates.TemplateRow]
    closing_sync: templates.TemplateRow
    build_methods: MethodBuilder
    build_worker_tasks: WorkerTaskBuilder

    @property
    def label(self) -> str:
        return goal_label(self.goal)

    def week_template(self, worker_count: int) -> templates.WeekTemplate:
        """Return the worker-count variant: 1, 2, or 3+ (extra row per day plus a Friday sync)."""
        if worker_count <= 1:
            return self.solo_template
        if worker_count == 2:
            return self.pair_template
        variant: templates.WeekTemplate = {}
        for day in templates.WEEKDAYS:
            rows = list(self.pair_template[day])
            rows.append(self.third_worker_rows[day])
            if day == templates.WEEKDAYS[-1]:
                rows.append(self.closing_sync)
            variant[day] = rows
        return variant

    def task_classification(self) -> TaskClassification:
        return TaskClassification(**templates.CLASSIFICATION_LISTS[self.goal])


def _spend(ctx: PlanningContext, spec: SpendItemSpec) -> Optional[BudgetLineItem]:
    return ctx.ledger.allocate(spec)


def _common_tail(ctx: PlanningContext, actions: List[Action], *, paid_ads: bool) -> List[Action]:
    """Methods every branch may append: paid ads, category signature spend, resource-driven extras."""
    flags = ctx.flags
    if paid_ads and flags.can_do_social_media and ctx.constraints.monthly_budget >= PAID_ADS_BUDGET_FLOOR:
        boost = _spend(ctx, SOCIAL_AD_BOOST)
        if boost:
            actions.append(
                Action(
                    description=f"Boost local posts for {boost.quantity} days",
                    how_text=(
                        f"Run a {format_rupees(boost.unit_cost)}/day Instagram and Facebook boost limited to a 3 km "
                        "radius. AI writes the ad text; you approve it before it goes live."
                    ),
                    owner_label=ctx.owner(1),
                    cost=boost.total_cost,
                    location_text="Instagram and Facebook (3 km radius)",
                    timing_text="Week 1-2, weekends first",
                )
            )

    signature = _spend(ctx, ctx.profile.signature_spend)
    if signature:
        actions.append(
            Action(
                description=ctx.profile.signature_action,
                how_text=f"{signature.purpose}. Budget covers {signature.quantity} x {format_rupees(signature.unit_cost)}.",
                owner_label=ctx.owner(2),
                cost=signature.total_cost,
                location_text=ctx.profile.venues,
                timing_text="Week 2, one busy afternoon",
            )
        )

    if flags.is_low_budget:
        actions.append(
            Action(
                description="Start word-of-mouth referrals",
                how_text="Ask every happy customer to tell two friends; AI writes a one-line thank-you message to send them.",
                owner_label=ctx.owner(1),
                cost=0,
                location_text="In-store",
                timing_text="Daily, at billing",
            )
        )
    if flags.has_limited_time:
        actions.append(
            Action(
                description="Batch the week's growth work into one block",
                how_text="Group printing, posting and calls into a single weekly slot so short days stay free for customers.",
                owner_label=ctx.owner(1),
                cost=0,
                timing_text="One fixed slot per week",
            )
        )
    return actions


def _visibility_methods(ctx: PlanningContext) -> List[Action]:
    actions: List[Action] = []
    pamphlets = _spend(ctx, PAMPHLETS)
    if pamphlets:
        actions.append(
            Action(
                description=f"Distribute {pamphlets.quantity} pamphlets",
                how_text=(
                    f"Print {pamphlets.quantity} A5-sized pamphlets with shop name, address, phone, and key services. "
                    "AI generates the content."
                ),
                owner_label=ctx.owner(1),
                cost=pamphlets.total_cost,
                location_text=ctx.profile.venues,
                timing_text="Every morning for first 5 days",
            )
        )
    posters = _spend(ctx, POSTERS)
    if posters:
        actions.append(
            Action(
                description=f"Place {posters.quantity} posters",
                how_text=(
                    f"Print {posters.quantity} A3 posters. AI designs content. Worker places them on community "
                    "notice boards, local shops, and public spaces."
                ),
                owner_label=ctx.owner(2),
                cost=posters.total_cost,
                location_text="Community notice boards, local shops, public spaces",
                timing_text="Week 1, then refresh every 2 weeks",
            )
        )
    actions.extend(
        [
            Action(
                description="Optimize Google Business Profile",
                how_text="Complete all profile sections: hours, photos, services, posts. AI writes descriptions. Worker takes and uploads photos.",
                owner_label=ctx.owner(1),
                location_text="Online (Google Business Profile)",
                timing_text="Day 1-2, then weekly updates",
            ),
            Action(
                description="Submit to local directories",
                how_text="List business on Justdial, Sulekha, IndiaMART. AI writes business descriptions. Worker completes registrations.",
                owner_label=ctx.owner(1),
                location_text="Online directories",
                timing_text="Week 1, 2 hours total",
            ),
            Action(
                description="Collect and respond to reviews",
                how_text="Ask customers for Google reviews. AI drafts thank-you responses. Worker sends requests and responds.",
                owner_label=ctx.owner(2),
                location_text="Google Business Profile",
                timing_text="Daily, 15 minutes per day",
            ),
        ]
    )
    if ctx.flags.can_do_social_media:
        actions.append(
            Action(
                description="Post three times a week on Instagram and Facebook",
                how_text=f"AI drafts captions about {ctx.profile.showcase}. Worker adds a real photo and posts.",
                owner_label=ctx.owner(2),
                location_text="Instagram and Facebook",
                timing_text="Monday, Wednesday, Friday",
            )
        )
    return _common_tail(ctx, actions, paid_ads=True)


def _sales_methods(ctx: PlanningContext) -> List[Action]:
    actions: List[Action] = [
        Action(
            description="Send WhatsApp offer messages to existing customers",
            how_text="AI generates personalized offers. Worker sends messages every Friday with limited-time discounts.",
            owner_label=ctx.owner(1),
            location_text="WhatsApp",
            timing_text="Every Friday, 30 minutes",
        ),
        Action(
            description="Implement in-store upselling",
            how_text="AI creates upselling scripts. Workers practice and use during customer interactions.",
            owner_label="All workers" if ctx.workers > 1 else ctx.owner(1),
            location_text="In-store",
            timing_text="Daily during customer interactions",
        ),
        Action(
            description="Send reminders to repeat customers",
            how_text="AI identifies customers who haven't visited in 2+ weeks. Worker sends personalized reminder messages.",
            owner_label=ctx.owner(2),
            location_text="WhatsApp/SMS",
            timing_text="Weekly, 45 minutes",
        ),
    ]
    flyers = _spend(ctx, OFFER_FLYERS)
    if flyers:
        actions.append(
            Action(
                description="Print and distribute limited-time offer flyers",
                how_text=(
                    f"Print {flyers.quantity} offer flyers. AI designs offers. Worker distributes to existing "
                    "customers and nearby areas."
                ),
                owner_label=ctx.owner(1),
                cost=flyers.total_cost,
                location_text="In-store and nearby areas",
                timing_text="Week 1 and Week 3, 2 hours each",
            )
        )
    inserts = _spend(ctx, PACKAGING_INSERTS)
    if inserts:
        actions.append(
            Action(
                description="Add offer inserts to packaging",
                how_text=f"Print {inserts.quantity} small offer cards. AI writes offers. Worker inserts in every order.",
                owner_label="All workers" if ctx.workers > 1 else ctx.owner(1),
                cost=inserts.total_cost,
                location_text="In-store packaging",
                timing_text="Daily with every order",
            )
        )
    if ctx.flags.can_do_social_media:
        actions.append(
            Action(
                description="Share weekly offers on Instagram stories",
                how_text="AI drafts the story text from the current offer. Worker adds a product photo and posts.",
                owner_label=ctx.owner(2),
                location_text="Instagram",
                timing_text="Monday and Thursday, 10 minutes",
            )
        )
    return _common_tail(ctx, actions, paid_ads=True)


def _expansion_methods(ctx: PlanningContext) -> List[Action]:
    actions: List[Action] = [
        Action(
            description="Identify potential partners",
            how_text=(
                f"AI researches nearby {ctx.profile.partners}. Worker visits and discusses collaboration opportunities."
            ),
            owner_label=ctx.owner(1),
            location_text="Nearby businesses",
            timing_text="Week 1-2, 2 hours per week",
        )
    ]
    meetings = _spend(ctx, PARTNERSHIP_MEETINGS)
    if meetings:
        actions.append(
            Action(
                description="Conduct partnership meetings",
                how_text="AI drafts partnership proposals. Worker schedules and attends meetings with potential partners.",
                owner_label=ctx.owner(1),
                cost=meetings.total_cost,
                location_text="Partner locations or neutral venues",
                timing_text="Week 2-3, 2-3 meetings",
            )
        )
    pilot = _spend(ctx, PILOT_PROGRAM)
    if pilot:
        actions.append(
            Action(
                description="Run pilot delivery/cross-selling tests",
                how_text="AI designs pilot program. Worker executes small-scale test with 1-2 partners.",
                owner_label=ctx.owner(2),
                cost=pilot.total_cost,
                location_text="Partner locations",
                timing_text="Week 3-4, 4 hours total",
            )
        )
    actions.append(
        Action(
            description="Create expansion documentation",
            how_text="AI drafts partnership agreements, expansion plans, and resource requirements. Worker reviews and finalizes.",
            owner_label=ctx.owner(1),
            location_text="Office/home",
            timing_text="Week 2-4, 1 hour per week",
        )
    )
    if ctx.flags.can_do_social_media:
        actions.append(
            Action(
                description="Announce new partners on social media",
                how_text="AI drafts a short announcement for each signed partner. Worker adds a joint photo and posts.",
                owner_label=ctx.owner(2),
                location_text="Instagram and Facebook",
                timing_text="After each agreement",
            )
        )
    return _common_tail(ctx, actions, paid_ads=False)


def _visibility_worker_tasks(ctx: PlanningContext, index: int) -> List[str]:
    budget = ctx.constraints.monthly_budget
    if index == 1:
        tasks = [
            f"Optimize Google Business Profile ({ctx.capped_minutes(120)} min on Day 1-2)",
            f"Submit to online directories ({ctx.capped_minutes(120)} min in Week 1)",
        ]
        if budget >= PAMPHLETS.minimum_remaining:
            count = planned_quantity(PAMPHLETS, budget)
            tasks.append(f"Distribute {count} pamphlets daily for 5 days ({ctx.capped_minutes(60)} min per day)")
        return tasks
    if index == 2:
        count = planned_quantity(POSTERS, budget)
        return [
            f"Place {count} posters in Week 1 ({ctx.capped_minutes(90)} min)",
            f"Collect and respond to reviews daily ({ctx.capped_minutes(15)} min per day)",
        ]
    return [
        f"Assist with pamphlet distribution ({ctx.capped_minutes(45)} min per day)",
        f"Help with directory submissions ({ctx.capped_minutes(30)} min)",
    ]


def _sales_worker_tasks(ctx: PlanningContext, index: int) -> List[str]:
    if index == 1:
        tasks = [
            f"Send WhatsApp offers every Friday ({ctx.capped_minutes(30)} min)",
            f"In-store upselling during shifts ({ctx.capped_minutes(20)} min/day)",
        ]
        if ctx.constraints.monthly_budget >= OFFER_FLYERS.minimum_remaining:
            tasks.append(f"Distribute offer flyers in Week 1 and 3 ({ctx.capped_minutes(120)} min each)")
        return tasks
    if index == 2:
        return [
            f"Send repeat customer reminders weekly ({ctx.capped_minutes(45)} min)",
            f"In-store upselling during shifts ({ctx.capped_minutes(20)} min/day)",
            f"Add offer inserts to packaging ({ctx.capped_minutes(10)} min/day)",
        ]
    return [
        f"In-store upselling during shifts ({ctx.capped_minutes(20)} min/day)",
        f"Add offer inserts to packaging ({ctx.capped_minutes(10)} min/day)",
    ]


def _expansion_worker_tasks(ctx: PlanningContext, index: int) -> List[str]:
    if index == 1:
        return [
            f"Identify potential partners ({ctx.capped_minutes(120)} min/week in Week 1-2)",
            f"Conduct partnership meetings ({ctx.capped_minutes(180)} min in Week 2-3)",
            f"Create expansion documentation ({ctx.capped_minutes(60)} min/week)",
        ]
    if index == 2:
        return [
            f"Assist with partner research ({ctx.capped_minutes(60)} min/week)",
            f"Run pilot tests ({ctx.capped_minutes(240)} min in Week 3-4)",
        ]
    return [f"Support expansion activities ({ctx.capped_minutes(90)} min/week)"]


STRATEGIES: Dict[GrowthGoal, GoalStrategy] = {
    GrowthGoal.VISIBILITY: GoalStrategy(
        goal=GrowthGoal.VISIBILITY,
        solo_template=templates.VISIBILITY_SOLO,
        pair_template=templates.VISIBILITY_PAIR,
        third_worker_rows=templates.VISIBILITY_THIRD_ROWS,
        closing_sync=templates.VISIBILITY_SYNC,
        build_methods=_visibility_methods,
        build_worker_tasks=_visibility_worker_tasks,
    ),
    GrowthGoal.SALES: GoalStrategy(
        goal=GrowthGoal.SALES,
        solo_template=templates.SALES_SOLO,
        pair_template=templates.SALES_PAIR,
        third_worker_rows=templates.SALES_THIRD_ROWS,
        closing_sync=templates.SALES_SYNC,
        build_methods=_sales_methods,
        build_worker_tasks=_sales_worker_tasks,
    ),
    GrowthGoal.EXPANSION: GoalStrategy(
        goal=GrowthGoal.EXPANSION,
        solo_template=templates.EXPANSION_SOLO,
        pair_template=templates.EXPANSION_PAIR,
        third_worker_rows=templates.EXPANSION_THIRD_ROWS,
        closing_sync=templates.EXPANSION_SYNC,
        build_methods=_expansion_methods,
        build_worker_tasks=_expansion_worker_tasks,
    ),
}


def select_strategy(goal: GrowthGoal) -> GoalStrategy:
    return STRATEGIES[goal]


def task_classification(goal: GrowthGoal) -> TaskClassification:
    return select_strategy(goal).task_classification()
