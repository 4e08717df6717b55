"""
Calculation Core

Pure functions over budget records. Nothing in this package reads from
or writes to storage.
"""

from fortnight_budget.calculations.frequency import (
    FORTNIGHTS_BY_FREQUENCY,
    FORTNIGHTS_PER_YEAR,
    CalculationError,
    UnsupportedFrequencyError,
    fortnights_for,
)
from fortnight_budget.calculations.amortization import fortnightly_amount
from fortnight_budget.calculations.aggregation import (
    category_breakdown,
    category_total,
    percentage_of,
    round_one_decimal,
    safe_to_spend,
    total_allocated,
    total_balance,
)
from fortnight_budget.calculations.progress import (
    allocation_progress,
    days_between,
    fortnights_since,
    fortnights_until,
)
from fortnight_budget.calculations.schedule import (
    next_due_date,
    next_pay_date,
    roll_forward,
)

__all__ = [
    # Frequency normalizer
    "FORTNIGHTS_BY_FREQUENCY",
    "FORTNIGHTS_PER_YEAR",
    "CalculationError",
    "UnsupportedFrequencyError",
    "fortnights_for",
    # Amortizer
    "fortnightly_amount",
    # Aggregator
    "category_breakdown",
    "category_total",
    "percentage_of",
    "round_one_decimal",
    "safe_to_spend",
    "total_allocated",
    "total_balance",
    # Progress tracker
    "allocation_progress",
    "days_between",
    "fortnights_since",
    "fortnights_until",
    # Schedule advancer
    "next_due_date",
    "next_pay_date",
    "roll_forward",
]
