from shopgrowth.db.base import Base
from shopgrowth.db import models  # noqa: F401  ensure models are loaded


def test_metadata_contains_core_tables() -> None:
    table_names = set(Base.metadata.tables.keys())
    expected = {
        "growth_plans",
        "plan_events",
        "kv_entries",
    }

    assert expected.issubset(table_names)


def test_plan_events_reference_growth_plans() -> None:
    events = Base.metadata.tables["plan_events"]
    targets = {fk.column.table.name for fk in events.foreign_keys}

    assert targets == {"growth_plans"}
