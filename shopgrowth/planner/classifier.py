"""Business type classification and per-category vocabulary."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from shopgrowth.api.schemas.growth_plan import BusinessCategory
from shopgrowth.planner.budget import SpendItemSpec

# Checked in order; the first rule with a matching keyword wins.
CATEGORY_RULES: Tuple[Tuple[BusinessCategory, Tuple[str, ...]], ...] = (
    (BusinessCategory.BAKERY, ("bak",)),
    (BusinessCategory.REPAIR_SHOP, ("repair", "mobile", "laptop")),
    (BusinessCategory.COOL_DRINKS, ("cool", "drink", "beverage")),
)


def classify_business(business_type: Optional[str]) -> BusinessCategory:
    text = (business_type or "").lower()
    for category, keywords in CATEGORY_RULES:
        if any(keyword in text for keyword in keywords):
            return category
    return BusinessCategory.OTHER


@dataclass(frozen=True)
class CategoryProfile:
    category: BusinessCategory
    product: str
    audience: str
    venues: str
    partners: str
    showcase: str
    signature_action: str
    signature_spend: SpendItemSpec
    collaboration_ideas: Tuple[str, ...]


_GENERIC_COLLABORATION = (
    "Partner with complementary local businesses for cross-promotion",
    "Collaborate with local influencers or micro-influencers for free product/service exchange",
    "Join or create a local business association for shared marketing efforts",
    "Partner with local community centers or schools for events",
)

CATEGORY_PROFILES = {
    BusinessCategory.BAKERY: CategoryProfile(
        category=BusinessCategory.BAKERY,
        product="fresh bread and baked goods",
        audience="nearby households and office-goers",
        venues="residential lanes, bus stops and morning markets",
        partners="local cafes and restaurants",
        showcase="today's special bakes",
        signature_action="Organize a small sampling event at the bakery",
        signature_spend=SpendItemSpec(
            item="Sampling Event",
            fraction=0.3,
            ceiling=800,
            unit_cost=200,
            minimum_remaining=200,
            purpose="Let new customers taste signature items at the counter",
        ),
        collaboration_ideas=(
            "Supply morning bread to 2-3 nearby cafes on a weekly contract",
            "Offer birthday-cake tie-ups with local event planners",
        )
        + _GENERIC_COLLABORATION,
    ),
    BusinessCategory.REPAIR_SHOP: CategoryProfile(
        category=BusinessCategory.REPAIR_SHOP,
        product="mobile and laptop repairs",
        audience="students and working professionals",
        venues="IT parks, colleges and residential areas",
        partners="mobile shops, laptop dealers and electronics stores",
        showcase="before-and-after repair results",
        signature_action="Offer door-to-door pickup for repairs in nearby areas",
        signature_spend=SpendItemSpec(
            item="Pickup Service Trips",
            fraction=0.15,
            ceiling=300,
            unit_cost=50,
            minimum_remaining=100,
            purpose="Door-to-door device pickup in nearby areas",
        ),
        collaboration_ideas=(
            "Set up referral commissions with mobile and laptop dealers",
            "Offer discounted screen checks at college tech fests",
        )
        + _GENERIC_COLLABORATION,
    ),
    BusinessCategory.COOL_DRINKS: CategoryProfile(
        category=BusinessCategory.COOL_DRINKS,
        product="chilled drinks and juices",
        audience="shoppers, commuters and event organizers",
        venues="markets, bus stops and event grounds",
        partners="event organizers, gyms and restaurants",
        showcase="refreshing seasonal drinks",
        signature_action="Hand out tasting samples at busy locations",
        signature_spend=SpendItemSpec(
            item="Tasting Samples",
            fraction=0.3,
            ceiling=700,
            unit_cost=10,
            minimum_remaining=100,
            purpose="Free tasting cups at busy locations",
        ),
        collaboration_ideas=(
            "Supply drinks in bulk for local parties and gatherings",
            "Run a combo offer with a neighbouring snack stall",
        )
        + _GENERIC_COLLABORATION,
    ),
    BusinessCategory.OTHER: CategoryProfile(
        category=BusinessCategory.OTHER,
        product="products and services",
        audience="nearby residents",
        venues="local markets and busy streets",
        partners="complementary local businesses",
        showcase="your best work",
        signature_action="Distribute promotional materials in target areas",
        signature_spend=SpendItemSpec(
            item="Promotional Materials",
            fraction=0.3,
            ceiling=600,
            unit_cost=2,
            minimum_remaining=500,
            purpose="Printed material for target areas",
        ),
        collaboration_ideas=_GENERIC_COLLABORATION,
    ),
}


def category_profile(category: BusinessCategory) -> CategoryProfile:
    return CATEGORY_PROFILES[category]


def collaboration_ideas(category: BusinessCategory) -> List[str]:
    return list(CATEGORY_PROFILES[category].collaboration_ideas)
