"""
Aggregator

Sums fortnightly amounts across allocations and compares them with income.

CRITICAL: Only active allocations count. Archived allocations stay in
storage but must never reduce the safe-to-spend figure.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from fortnight_budget.calculations.amortization import fortnightly_amount
from fortnight_budget.models.budget import (
    Account,
    Allocation,
    AllocationCategory,
    Income,
)
from fortnight_budget.models.results import CategoryAmount, CategoryBreakdown


ZERO = Decimal("0")
ONE_DECIMAL_PLACE = Decimal("0.1")


def round_one_decimal(value: Decimal) -> Decimal:
    """Round half up to one decimal place (12.25 -> 12.3)."""
    return Decimal(value).quantize(ONE_DECIMAL_PLACE, rounding=ROUND_HALF_UP)


def percentage_of(part: Decimal, whole: Decimal) -> Decimal:
    """part as a percentage of whole, one decimal place. 0 when whole is 0."""
    if whole <= 0:
        return round_one_decimal(ZERO)
    return round_one_decimal(Decimal(part) / Decimal(whole) * 100)


def total_allocated(allocations: Iterable[Allocation]) -> Decimal:
    """Fortnightly amount set aside across all active allocations."""
    return sum(
        (fortnightly_amount(a) for a in allocations if a.is_active),
        ZERO,
    )


def safe_to_spend(income: Income, allocations: Iterable[Allocation]) -> Decimal:
    """
    Income left each fortnight once every active allocation is funded.

    Can be negative when allocations outgrow income.
    """
    return Decimal(income.amount) - total_allocated(allocations)


def category_total(
    allocations: Iterable[Allocation],
    category: AllocationCategory,
) -> Decimal:
    """Fortnightly amount for the active allocations of one category."""
    category = AllocationCategory(category)
    return sum(
        (
            fortnightly_amount(a)
            for a in allocations
            if a.is_active and a.category == category
        ),
        ZERO,
    )


def category_breakdown(
    income: Income,
    allocations: Iterable[Allocation],
) -> CategoryBreakdown:
    """
    Fortnightly amount and share of income for every category.

    Percentages are 0 when income is 0 rather than raising.
    """
    allocations = list(allocations)
    shares = {}
    for category in AllocationCategory:
        amount = category_total(allocations, category)
        shares[category.value] = CategoryAmount(
            amount=amount,
            percentage=percentage_of(amount, income.amount),
        )
    return CategoryBreakdown(**shares)


def total_balance(accounts: Iterable[Account]) -> Decimal:
    """Sum of the balances across all accounts."""
    return sum((Decimal(a.current_balance) for a in accounts), ZERO)
