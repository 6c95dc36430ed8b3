"""ORM models exposed for metadata discovery."""
from shopgrowth.db.models.growth_plan import GrowthPlanRecord
from shopgrowth.db.models.kv_entry import KeyValueEntry
from shopgrowth.db.models.plan_event import PlanEvent

__all__ = [
    "GrowthPlanRecord",
    "KeyValueEntry",
    "PlanEvent",
]
