"""Template-driven narrative text for plans and tasks.

Every sentence interpolates live values (budget, hours, worker count) so two
shops with different constraints never receive identical reasoning.
"""
from __future__ import annotations

import re
from typing import Callable, List, Pattern, Tuple

from shopgrowth.api.schemas.growth_plan import Constraints, GrowthGoal, ResourceFlags
from shopgrowth.planner.classifier import CategoryProfile

GOAL_LABELS = {
    GrowthGoal.VISIBILITY: "Increase Visibility",
    GrowthGoal.SALES: "Increase Sales",
    GrowthGoal.EXPANSION: "Business Expansion",
}

SAFETY_NOTE = (
    "Results are not guaranteed. All spending, partnerships, and expansion decisions remain under "
    "your control. AI only assists with planning and content creation - you make all final decisions."
)


def format_rupees(amount: float) -> str:
    """Render an amount with Indian digit grouping, e.g. 150000 -> '₹1,50,000'."""
    rounded = round(float(amount), 2)
    whole = int(rounded)
    fraction = round(rounded - whole, 2)
    digits = str(abs(whole))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])
    text = f"₹{digits}"
    if fraction:
        text = f"{text}.{int(round(fraction * 100)):02d}"
    return text


def format_hours(hours: float) -> str:
    value = f"{hours:g}"
    return f"{value} hour" if hours == 1 else f"{value} hours"


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def goal_label(goal: GrowthGoal) -> str:
    return GOAL_LABELS[goal]


def compose_business_summary(constraints: Constraints) -> str:
    return (
        f"You run a {constraints.business_type} with {format_rupees(constraints.monthly_budget)} monthly budget, "
        f"{format_hours(constraints.time_per_day_hours)} per day, and "
        f"{_plural(constraints.worker_count, 'worker')}. "
        f"Target: {goal_label(constraints.growth_goal)} within {constraints.target_span_days} days."
    )


def compose_goal_explanation(constraints: Constraints, flags: ResourceFlags, profile: CategoryProfile) -> str:
    budget = format_rupees(constraints.monthly_budget)
    hours = format_hours(constraints.time_per_day_hours)
    workers = _plural(constraints.worker_count, "worker")
    goal = constraints.growth_goal

    if goal is GrowthGoal.VISIBILITY:
        opening = (
            f"Visibility comes first: with {budget} and {hours} a day, the plan puts your {profile.product} "
            f"in front of {profile.audience} through free listings and low-cost print."
        )
    elif goal is GrowthGoal.SALES:
        opening = (
            f"Sales come from people who already know you: {workers} can turn existing footfall into bigger "
            f"and repeat orders without spending more than {budget} this month."
        )
    else:
        opening = (
            f"Expansion is tested before it is scaled: the plan uses {budget} for meetings and a small pilot "
            f"with {profile.partners}, spread over {constraints.target_span_days} days."
        )

    notes: List[str] = []
    if flags.is_low_budget:
        notes.append(f"Because {budget} is a tight budget, zero-cost methods carry most of the work.")
    if flags.has_very_limited_time:
        notes.append(f"With only {hours} a day, each day keeps a single task.")
    elif flags.has_limited_time:
        notes.append(f"With {hours} a day, each day is trimmed to its two most important tasks.")
    if not flags.can_do_social_media:
        notes.append("Social media work is left out until more daily time is available.")
    return " ".join([opening] + notes)


def compose_ai_contribution(constraints: Constraints) -> str:
    saved = round(constraints.time_per_day_hours * 0.7 * constraints.worker_count)
    return (
        "AI reduces your planning and content creation time by 70%. AI writes all text content "
        "(pamphlets, posters, offers, proposals), researches partners, identifies customers, and creates "
        "scripts. You only review, approve, and execute. "
        f"This saves {saved} hours per day across all workers."
    )


Reasoner = Callable[[str, Constraints, str], str]


def _social(text: str, c: Constraints, day: str) -> str:
    return (
        f"AI drafts the post so this takes about {_minutes_per_worker(c)} minutes of your {format_hours(c.time_per_day_hours)} "
        f"on {day}; a real photo from the shop keeps it authentic at no cost against your {format_rupees(c.monthly_budget)} budget."
    )


def _directory(text: str, c: Constraints, day: str) -> str:
    return (
        f"Free listings keep working after {day}: nearby searches find your {c.business_type} without using any of "
        f"the {format_rupees(c.monthly_budget)} budget."
    )


def _outreach(text: str, c: Constraints, day: str) -> str:
    return (
        f"Personal contact converts better than ads for a {c.business_type}; "
        f"{_plural(c.worker_count, 'worker')} can cover this within {format_hours(c.time_per_day_hours)} on {day}."
    )


def _photo(text: str, c: Constraints, day: str) -> str:
    return (
        f"Fresh photos lift profile clicks; one person needs about 15 of the {_minutes_per_worker(c)} minutes "
        f"available per worker on {day}."
    )


def _reviews(text: str, c: Constraints, day: str) -> str:
    return (
        f"Reviews are free social proof: asking on {day} costs nothing from your {format_rupees(c.monthly_budget)} "
        f"budget and fits inside {format_hours(c.time_per_day_hours)}."
    )


def _promotion(text: str, c: Constraints, day: str) -> str:
    return (
        f"Printed offers reach people who never search online; the spend stays inside the "
        f"{format_rupees(c.monthly_budget)} monthly budget and {_plural(c.worker_count, 'worker')} can share the rounds on {day}."
    )


def _networking(text: str, c: Constraints, day: str) -> str:
    return (
        f"Partnerships need face-to-face trust; set aside part of your {format_hours(c.time_per_day_hours)} on {day} "
        f"so {_plural(c.worker_count, 'worker')} can keep the shop running meanwhile."
    )


def _research(text: str, c: Constraints, day: str) -> str:
    return (
        f"A short review on {day} shows where the {format_rupees(c.monthly_budget)} is working, "
        f"so next week's {format_hours(c.time_per_day_hours)} a day goes to the best channel."
    )


def _generic(text: str, c: Constraints, day: str) -> str:
    return (
        f"Steady daily effort matters more than one big push: this fits {_plural(c.worker_count, 'worker')}, "
        f"{format_hours(c.time_per_day_hours)} a day and a {format_rupees(c.monthly_budget)} budget on {day}."
    )


def _pattern(*alternatives: str) -> Pattern[str]:
    return re.compile("|".join(alternatives), re.IGNORECASE)


# Checked in order; the first pattern found in the task text selects the template.
REASONING_TEMPLATES: Tuple[Tuple[Pattern[str], Reasoner], ...] = (
    (_pattern(r"social media", r"instagram", r"facebook", r"\breels?\b", r"\bpost(s|ing)?\b"), _social),
    (_pattern(r"director(y|ies)", r"justdial", r"sulekha", r"indiamart", r"google business"), _directory),
    (_pattern(r"\bcall\b", r"whatsapp", r"reach out", r"\bvisit", r"follow up", r"remind"), _outreach),
    (_pattern(r"photo"), _photo),
    (_pattern(r"review"), _reviews),
    (_pattern(r"offer", r"discount", r"flyer", r"pamphlet", r"poster", r"insert", r"display", r"upsell", r"sampl"), _promotion),
    (_pattern(r"partner", r"meeting", r"collaborat", r"\bsync\b"), _networking),
    (_pattern(r"research", r"analy[sz]e", r"\bdata\b", r"\bcheck\b", r"verify"), _research),
)


def compose_task_reasoning(task_text: str, constraints: Constraints, day_name: str) -> str:
    for pattern, reasoner in REASONING_TEMPLATES:
        if pattern.search(task_text):
            return reasoner(task_text, constraints, day_name)
    return _generic(task_text, constraints, day_name)


def caption_suggestions(task_text: str, profile: CategoryProfile, constraints: Constraints, day_name: str) -> List[str]:
    """Ready-to-edit captions for AI-prepared tasks."""
    tag = re.sub(r"[^a-z0-9]", "", constraints.business_type.lower()) or "localbusiness"
    team = "1 person" if constraints.worker_count == 1 else f"{constraints.worker_count} people"
    return [
        f"{day_name} special: {profile.showcase} - come by and say hello! #{tag} #shoplocal",
        f"Made for {profile.audience}: our {profile.product}, ready when you are. #{tag}",
        f"Thank you for supporting a small team of {team}! #{tag} #community",
    ]


def review_checklist(task_text: str) -> List[str]:
    lowered = task_text.lower()
    checklist = ["Read the AI draft or current listing end to end"]
    if "profile" in lowered or "director" in lowered or "listing" in lowered:
        checklist.append("Confirm address, phone number and opening hours")
    if "price" in lowered or "offer" in lowered or "sales" in lowered:
        checklist.append("Confirm prices and offer end dates")
    if "review" in lowered:
        checklist.append("Reply politely to any negative feedback")
    checklist.append("Approve or edit before anything goes public")
    return checklist


def _minutes_per_worker(constraints: Constraints) -> int:
    return int(round(constraints.time_per_day_hours * 60 / constraints.worker_count))
