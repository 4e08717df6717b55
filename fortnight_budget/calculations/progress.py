"""
Progress Tracker

Answers three questions about a single allocation:
1. How much of the total is already saved?
2. How many fortnights are left until it is due?
3. Are the savings keeping pace with the fortnights since it was created?

DESIGN DECISION: All day counts are calendar-day differences between
dates. Times of day never enter the calculation, so a fortnight boundary
cannot shift because of the hour or the time zone.
"""

import math
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from fortnight_budget.calculations.aggregation import percentage_of
from fortnight_budget.calculations.amortization import fortnightly_amount
from fortnight_budget.models.budget import Allocation
from fortnight_budget.models.results import AllocationProgress


DAYS_PER_FORTNIGHT = 14
MAX_PROGRESS = Decimal("100.0")


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: date, end: date) -> int:
    """Calendar days from start to end. Negative when end is earlier."""
    return (_as_date(end) - _as_date(start)).days


def fortnights_until(due_date: Optional[date], today: date) -> Optional[int]:
    """Whole fortnights left until due_date, rounded up. Never negative."""
    if due_date is None:
        return None
    days = days_between(today, due_date)
    return max(0, math.ceil(days / DAYS_PER_FORTNIGHT))


def fortnights_since(start: date, today: date) -> int:
    """Completed fortnights since start. 0 when start is in the future."""
    return max(0, days_between(start, today) // DAYS_PER_FORTNIGHT)


def allocation_progress(
    allocation: Allocation,
    today: Optional[date] = None,
) -> AllocationProgress:
    """
    Calculate saving progress and pacing for an allocation.

    Args:
        allocation: The allocation to inspect
        today: Reference date. Defaults to the current local date.

    Returns:
        AllocationProgress. progress_percentage is clamped to 0-100 but
        remaining_to_save is not, so it goes negative when over-saved.
    """
    today = _as_date(today or date.today())
    saved = Decimal(allocation.amount_already_saved)
    total = Decimal(allocation.total_amount)

    progress_percentage = min(MAX_PROGRESS, percentage_of(saved, total))

    fortnights_elapsed = fortnights_since(allocation.created_at, today)
    expected_saved = fortnightly_amount(allocation) * fortnights_elapsed

    return AllocationProgress(
        progress_percentage=progress_percentage,
        remaining_to_save=total - saved,
        fortnights_until_due=fortnights_until(allocation.due_date, today),
        fortnights_elapsed=fortnights_elapsed,
        expected_saved=expected_saved,
        on_track=saved >= expected_saved,
    )
