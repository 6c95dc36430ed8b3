"""Static weekly templates, phase templates and task lists for each growth goal.

Template rows are ``(owner_slot, text)`` pairs. ``owner_slot`` is 1, 2 or 3 for a
worker row, or ``ALL_WORKERS`` for a task shared by everyone. Text may use the
category placeholders ``{product}``, ``{audience}``, ``{venues}``, ``{partners}``,
``{showcase}`` and ``{business}``.

The first row of every day is never a social-media task, so trimming a day to
one or two tasks leaves the same count after social suppression.
"""
from __future__ import annotations

from typing import Dict, List, Tuple, Union

from shopgrowth.api.schemas.growth_plan import GrowthGoal

WEEKDAYS: Tuple[str, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")

ALL_WORKERS = "all"

OwnerSlot = Union[int, str]
TemplateRow = Tuple[OwnerSlot, str]
WeekTemplate = Dict[str, List[TemplateRow]]


VISIBILITY_SOLO: WeekTemplate = {
    "Monday": [
        (1, "Optimize the Google Business Profile with {showcase} photos and opening hours"),
        (1, "Post {showcase} on Instagram and Facebook with a location tag"),
        (1, "Distribute pamphlets at {venues}"),
    ],
    "Tuesday": [
        (1, "List the shop on Justdial, Sulekha and IndiaMART directories"),
        (1, "Write a short description of your {product} for directory listings"),
        (1, "Place posters on community notice boards near {venues}"),
    ],
    "Wednesday": [
        (1, "Ask 5 regular customers for Google reviews at the counter"),
        (1, "Create a social media reel showing how your {product} is made"),
        (1, "Visit 3 nearby shops to introduce the {business}"),
    ],
    "Thursday": [
        (1, "Distribute pamphlets to {audience}"),
        (1, "Check directory listings for new inquiries and reply"),
        (1, "Post a customer photo story on Instagram"),
    ],
    "Friday": [
        (1, "Update the Google Business Profile with this week's photos"),
        (1, "Post a weekend teaser on social media"),
        (1, "Reply to every new review with a thank-you note"),
    ],
}

VISIBILITY_PAIR: WeekTemplate = {
    "Monday": [
        (1, "Optimize the Google Business Profile with {showcase} photos and opening hours"),
        (2, "Distribute pamphlets at {venues}"),
        (1, "Post {showcase} on Instagram and Facebook with a location tag"),
    ],
    "Tuesday": [
        (1, "List the shop on Justdial, Sulekha and IndiaMART directories"),
        (2, "Place posters on community notice boards near {venues}"),
        (1, "Write a short description of your {product} for directory listings"),
    ],
    "Wednesday": [
        (2, "Ask 5 regular customers for Google reviews at the counter"),
        (1, "Visit 3 nearby shops to introduce the {business}"),
        (1, "Create a social media reel showing how your {product} is made"),
    ],
    "Thursday": [
        (2, "Distribute pamphlets to {audience}"),
        (1, "Check directory listings for new inquiries and reply"),
        (2, "Post a customer photo story on Instagram"),
    ],
    "Friday": [
        (1, "Update the Google Business Profile with this week's photos"),
        (2, "Reply to every new review with a thank-you note"),
        (1, "Post a weekend teaser on social media"),
    ],
}

VISIBILITY_THIRD_ROWS: Dict[str, TemplateRow] = {
    "Monday": (3, "Assist with pamphlet distribution around {venues}"),
    "Tuesday": (3, "Help complete directory registrations and note login details"),
    "Wednesday": (3, "Hand out pamphlets at the evening market"),
    "Thursday": (3, "Photograph {showcase} for the profile gallery"),
    "Friday": (3, "Tidy the storefront display for weekend visitors"),
}

VISIBILITY_SYNC: TemplateRow = (
    ALL_WORKERS,
    "Weekly sync: review which pamphlet spots and listings brought visitors",
)


SALES_SOLO: WeekTemplate = {
    "Monday": [
        (1, "Start in-store upselling with a two-line script for {product}"),
        (1, "Write a limited-time offer message for existing customers"),
        (1, "Post today's offer on Instagram stories"),
    ],
    "Tuesday": [
        (1, "Add offer inserts to every order"),
        (1, "Check which customers have not visited in 2+ weeks"),
        (1, "Create a Facebook post announcing a combo deal"),
    ],
    "Wednesday": [
        (1, "Call 10 repeat customers with a personalized reminder"),
        (1, "Distribute offer flyers to {audience}"),
        (1, "Draft a loyalty card offer for the fifth purchase"),
    ],
    "Thursday": [
        (1, "Set up a counter display for the limited-time offer"),
        (1, "Update the price board with combo offers"),
        (1, "Post customer testimonials on social media"),
    ],
    "Friday": [
        (1, "Send WhatsApp offer messages to existing customers"),
        (1, "Analyze this week's sales by product"),
        (1, "Draft next week's weekend offer"),
    ],
}

SALES_PAIR: WeekTemplate = {
    "Monday": [
        (1, "Start in-store upselling with a two-line script for {product}"),
        (2, "Write a limited-time offer message for existing customers"),
        (2, "Post today's offer on Instagram stories"),
    ],
    "Tuesday": [
        (2, "Add offer inserts to every order"),
        (1, "Check which customers have not visited in 2+ weeks"),
        (2, "Create a Facebook post announcing a combo deal"),
    ],
    "Wednesday": [
        (2, "Call 10 repeat customers with a personalized reminder"),
        (1, "Distribute offer flyers to {audience}"),
        (1, "Draft a loyalty card offer for the fifth purchase"),
    ],
    "Thursday": [
        (1, "Set up a counter display for the limited-time offer"),
        (2, "Update the price board with combo offers"),
        (1, "Post customer testimonials on social media"),
    ],
    "Friday": [
        (1, "Send WhatsApp offer messages to existing customers"),
        (2, "Analyze this week's sales by product"),
        (1, "Draft next week's weekend offer"),
    ],
}

SALES_THIRD_ROWS: Dict[str, TemplateRow] = {
    "Monday": (3, "Practice the upselling script during the lunch rush"),
    "Tuesday": (3, "Pack offer inserts into ready orders"),
    "Wednesday": (3, "Hand out offer flyers near {venues}"),
    "Thursday": (3, "Restock the counter display before the evening rush"),
    "Friday": (3, "Note which offers customers asked about at the counter"),
}

SALES_SYNC: TemplateRow = (
    ALL_WORKERS,
    "Weekly sync: review which offers sold best and agree next week's focus",
)


EXPANSION_SOLO: WeekTemplate = {
    "Monday": [
        (1, "Research 5 potential partners among {partners}"),
        (1, "Post a partnership call-out on social media"),
        (1, "Visit 2 shortlisted partners to discuss collaboration"),
    ],
    "Tuesday": [
        (1, "Draft a one-page partnership proposal"),
        (1, "Call partners from Monday's visits to schedule meetings"),
        (1, "Share your partnership story on Facebook"),
    ],
    "Wednesday": [
        (1, "Attend a partnership meeting with a shortlisted partner"),
        (1, "Verify partner pricing and delivery terms"),
        (1, "Write meeting notes and agreed next steps"),
    ],
    "Thursday": [
        (1, "Run a small pilot delivery with one partner"),
        (1, "Write expansion documentation covering costs, staff and timelines"),
        (1, "Post pilot photos on Instagram"),
    ],
    "Friday": [
        (1, "Analyze pilot results and costs"),
        (1, "Follow up with partners on next steps"),
        (1, "Create a Facebook update about new partners"),
    ],
}

EXPANSION_PAIR: WeekTemplate = {
    "Monday": [
        (1, "Research 5 potential partners among {partners}"),
        (2, "Visit 2 shortlisted partners to discuss collaboration"),
        (2, "Post a partnership call-out on social media"),
    ],
    "Tuesday": [
        (1, "Draft a one-page partnership proposal"),
        (2, "Call partners from Monday's visits to schedule meetings"),
        (1, "Share your partnership story on Facebook"),
    ],
    "Wednesday": [
        (1, "Attend a partnership meeting with a shortlisted partner"),
        (2, "Verify partner pricing and delivery terms"),
        (1, "Write meeting notes and agreed next steps"),
    ],
    "Thursday": [
        (2, "Run a small pilot delivery with one partner"),
        (1, "Write expansion documentation covering costs, staff and timelines"),
        (2, "Post pilot photos on Instagram"),
    ],
    "Friday": [
        (1, "Analyze pilot results and costs"),
        (2, "Follow up with partners on next steps"),
        (1, "Create a Facebook update about new partners"),
    ],
}

EXPANSION_THIRD_ROWS: Dict[str, TemplateRow] = {
    "Monday": (3, "Map delivery routes to the shortlisted partners"),
    "Tuesday": (3, "Prepare product samples for partner meetings"),
    "Wednesday": (3, "Keep the shop running while meetings take place"),
    "Thursday": (3, "Help pack and deliver the pilot order"),
    "Friday": (3, "Collect partner feedback on the pilot delivery"),
}

EXPANSION_SYNC: TemplateRow = (
    ALL_WORKERS,
    "Weekly sync: review pilot feedback and decide the next expansion step",
)


PHASE_TEMPLATES: Dict[GrowthGoal, Dict[int, Tuple[List[str], str]]] = {
    GrowthGoal.VISIBILITY: {
        1: (
            [
                "Day 1-2: Optimize Google Business Profile ({lead}, 2 hours)",
                "Day 1-3: Submit to directories ({first}, 2 hours)",
                "Day 1-5: Distribute {pamphlets} pamphlets daily ({first}, 60 min/day)",
                "Day 3-7: Place {posters} posters ({second}, 90 min total)",
                "Daily: Collect reviews ({second}, 15 min/day)",
            ],
            "Business appears in Google Maps, listed in 3+ directories, 50+ people see pamphlets",
        ),
        2: (
            [
                "Continue daily review collection (15 min/day)",
                "Refresh posters if needed",
                "Respond to directory inquiries",
                "Post weekly updates on Google Business Profile",
            ],
            "5-10 new Google reviews, inquiries from directories start coming",
        ),
        0: (
            [
                "Maintain review collection",
                "Update Google Business Profile weekly",
                "Respond to all directory inquiries promptly",
            ],
            "Steady increase in profile views and local search visibility",
        ),
    },
    GrowthGoal.SALES: {
        1: (
            [
                "Day 1: Print offer flyers (if budget allows)",
                "Day 1-7: Implement in-store upselling (all workers, daily)",
                "Day 1-7: Add offer inserts to every order (all workers, daily)",
                "Day 5 (Friday): Send WhatsApp offers to existing customers ({first}, 30 min)",
                "Day 7: Send repeat customer reminders ({second}, 45 min)",
            ],
            "Immediate sales boost from offers, 10-20% increase in average order value from upselling",
        ),
        2: (
            [
                "Continue daily upselling and inserts",
                "Day 12 (Friday): Send second round of WhatsApp offers",
                "Day 14: Send reminders to customers who didn't respond to Week 1 offers",
            ],
            "Repeat purchases from Week 1 customers, steady sales growth",
        ),
        3: (
            [
                "Day 15-17: Distribute new offer flyers (if budget allows)",
                "Continue all weekly routines",
                "Day 19 (Friday): Send third round of WhatsApp offers",
            ],
            "Peak sales week from combined offers and flyers",
        ),
        0: (
            [
                "Maintain all weekly routines",
                "Analyze which offers work best",
                "Focus on most effective methods",
            ],
            "Sustained sales growth, optimized offer strategy",
        ),
    },
    GrowthGoal.EXPANSION: {
        1: (
            [
                "Day 1-3: AI researches potential partners ({lead}, 2 hours)",
                "Day 4-7: Visit 3-5 nearby businesses to discuss partnerships ({lead}, 4 hours)",
                "Day 5-7: AI drafts initial partnership proposals (automated)",
            ],
            "List of 3-5 potential partners, initial interest from 2-3 businesses",
        ),
        2: (
            [
                "Day 8-10: Schedule partnership meetings ({lead}, 1 hour)",
                "Day 11-14: Conduct 2-3 partnership meetings ({lead}, 3 hours, {meeting_budget})",
                "Day 12-14: AI creates detailed partnership agreements (automated)",
            ],
            "2-3 partnership agreements in principle, clear expansion roadmap",
        ),
        3: (
            [
                "Day 15-17: Finalize partnership agreements ({lead}, 2 hours)",
                "Day 18-21: Start pilot delivery/cross-selling tests ({second}, 4 hours, {pilot_budget})",
                "Day 19-21: AI monitors pilot performance (automated)",
            ],
            "1-2 active partnerships, pilot test results, expansion feasibility confirmed",
        ),
        0: (
            [
                "Scale successful partnerships",
                "Document lessons learned",
                "Plan next expansion phase",
            ],
            "Sustainable expansion foundation, clear growth path",
        ),
    },
}


CLASSIFICATION_LISTS: Dict[GrowthGoal, Dict[str, List[str]]] = {
    GrowthGoal.VISIBILITY: {
        "automated": [
            "AI generates pamphlet/poster content",
            "AI writes business descriptions for directories",
            "AI drafts thank-you replies to reviews",
        ],
        "ai_assisted": [
            "Worker reviews and approves AI-generated content before printing",
            "Worker personalizes AI-drafted review replies before posting",
        ],
        "human_only": [
            "Physical pamphlet distribution",
            "Poster placement at locations",
            "Taking and uploading photos",
        ],
    },
    GrowthGoal.SALES: {
        "automated": [
            "AI drafts WhatsApp offer messages",
            "AI creates upselling scripts",
            "AI identifies repeat customers for reminders",
        ],
        "ai_assisted": [
            "Worker uses AI-written scripts during customer interactions",
            "Worker sends AI-drafted messages after personalization",
        ],
        "human_only": [
            "In-store customer interactions",
            "Adding inserts to orders",
            "Arranging the counter display",
        ],
    },
    GrowthGoal.EXPANSION: {
        "automated": [
            "AI researches potential partners",
            "AI drafts partnership proposals",
            "AI monitors pilot performance",
        ],
        "ai_assisted": [
            "Worker uses AI research to prioritize partner visits",
            "Worker reviews AI-drafted agreements before signing",
        ],
        "human_only": [
            "Attending partnership meetings",
            "Executing pilot tests",
            "Negotiating terms with partners",
        ],
    },
}
