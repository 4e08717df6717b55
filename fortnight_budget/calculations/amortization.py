"""Allocation Amortizer: spread an allocation's total over its fortnights."""

from decimal import Decimal

from fortnight_budget.calculations.frequency import fortnights_for
from fortnight_budget.models.budget import Allocation


def fortnightly_amount(allocation: Allocation) -> Decimal:
    """
    Amount to set aside each fortnight so the total is ready when due.

    Divides by the exact fraction (times denominator, over numerator)
    so monthly allocations are not skewed by a rounded constant.
    """
    fortnights = fortnights_for(allocation.frequency)
    return (
        Decimal(allocation.total_amount)
        * fortnights.denominator
        / fortnights.numerator
    )
