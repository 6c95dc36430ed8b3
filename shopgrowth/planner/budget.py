"""Budget allocation: worker shares and capped line items."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

from shopgrowth.api.schemas.growth_plan import BudgetLineItem

# Guards floor() against float noise such as 200 / 0.4 == 499.99999999999994.
_EPSILON = 1e-9


@dataclass(frozen=True)
class SpendItemSpec:
    """A candidate line item: capped at min(remaining * fraction, ceiling)."""

    item: str
    fraction: float
    ceiling: float
    unit_cost: float
    minimum_remaining: float
    purpose: str
    fixed_quantity: Optional[int] = None


def _cents(value: float) -> float:
    return round(value, 2)


def split_worker_budget(total: float, workers: int) -> List[float]:
    """Split a budget per worker; the division remainder goes to the first worker."""
    workers = max(int(workers), 1)
    share = math.floor(total / workers)
    remainder = _cents(total - share * workers)
    shares = [float(share)] * workers
    shares[0] = _cents(share + remainder)
    return shares


def quantity_for(total_cost: float, unit_cost: float) -> int:
    if unit_cost <= 0:
        return 0
    return int(math.floor(total_cost / unit_cost + _EPSILON))


class BudgetLedger:
    """Running budget counter that line items consume in declaration order."""

    def __init__(self, total: float):
        self.total = _cents(max(total, 0.0))
        self.remaining = self.total
        self.items: List[BudgetLineItem] = []

    def allocate(self, spec: SpendItemSpec) -> Optional[BudgetLineItem]:
        """Allocate one item; before absorption ``total_cost == quantity * unit_cost`` holds to the cent."""
        if self.remaining <= 0 or self.remaining < spec.minimum_remaining:
            return None

        cap = _cents(min(self.remaining * spec.fraction, spec.ceiling, self.remaining))
        if spec.fixed_quantity:
            # Unit cost is floored to whole cents so the total never exceeds the cap.
            quantity = spec.fixed_quantity
            unit_cost = math.floor(cap * 100 / quantity + _EPSILON) / 100
            allocated = _cents(unit_cost * quantity)
        else:
            # Whole units only.
            unit_cost = spec.unit_cost
            quantity = quantity_for(cap, unit_cost)
            allocated = _cents(quantity * unit_cost)
        if allocated <= 0:
            return None

        line_item = BudgetLineItem(
            item=spec.item,
            quantity=quantity,
            unit_cost=unit_cost,
            total_cost=allocated,
            purpose=spec.purpose,
            ceiling=spec.ceiling,
            allocated_cost=allocated,
        )
        self.remaining = _cents(self.remaining - allocated)
        self.items.append(line_item)
        return line_item

    def absorb_remainder(self) -> Optional[BudgetLineItem]:
        """
        Fold any unspent budget into the last line item.

        The leftover is kept on the row as ``absorbed_remainder`` and the quantity is
        recomputed from the new total. Returns the updated item, if any.
        """
        if self.remaining <= 0 or not self.items:
            return None

        last = self.items[-1]
        absorbed = _cents(last.absorbed_remainder + self.remaining)
        total_cost = _cents(last.allocated_cost + absorbed)
        updated = last.model_copy(
            update={
                "absorbed_remainder": absorbed,
                "total_cost": total_cost,
                "quantity": quantity_for(total_cost, last.unit_cost),
            }
        )
        self.items[-1] = updated
        self.remaining = 0.0
        return updated

    @property
    def spent(self) -> float:
        return _cents(sum(item.total_cost for item in self.items))
