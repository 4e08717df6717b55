"""
Schedule Advancer

Moves due dates and pay dates to their next occurrence.

DESIGN DECISION: Month and year steps use dateutil's relativedelta,
which clamps to the last valid day of the target month:
    Jan 31 + 1 month  -> Feb 28 (Feb 29 in a leap year)
    Feb 29 + 1 year   -> Feb 28
Days never roll over into the following month.
"""

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from fortnight_budget.calculations.frequency import UnsupportedFrequencyError
from fortnight_budget.models.budget import FrequencyType


STEP_BY_FREQUENCY = {
    FrequencyType.WEEKLY: relativedelta(days=7),
    FrequencyType.FORTNIGHTLY: relativedelta(days=14),
    FrequencyType.MONTHLY: relativedelta(months=1),
    FrequencyType.QUARTERLY: relativedelta(months=3),
    FrequencyType.YEARLY: relativedelta(years=1),
}

PAY_PERIOD = timedelta(days=14)


def next_due_date(current: date, frequency: FrequencyType) -> date:
    """Next occurrence of a due date one frequency step after current."""
    try:
        step = STEP_BY_FREQUENCY[FrequencyType(frequency)]
    except (ValueError, KeyError) as e:
        raise UnsupportedFrequencyError(
            f"Unsupported frequency: {frequency!r}"
        ) from e
    return current + step


def next_pay_date(current: date) -> date:
    """Income is fortnightly, so pay day is always 14 days on."""
    return current + PAY_PERIOD


def roll_forward(current: date, frequency: FrequencyType, today: date) -> date:
    """
    Advance a date until it is on or after today.

    Each step is taken from the previous result, so a clamped month end
    stays clamped (Jan 31 -> Feb 28 -> Mar 28).
    """
    while current < today:
        current = next_due_date(current, frequency)
    return current
