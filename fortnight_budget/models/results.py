"""
Derived Result Models

What the calculation core hands back to the presentation layer.
These are plain values: nothing here is ever persisted.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from fortnight_budget.models.budget import AllocationCategory


class CategoryAmount(BaseModel):
    """Fortnightly amount for one category and its share of income."""

    amount: Decimal = Field(
        ...,
        description="Sum of fortnightly amounts for the category"
    )
    percentage: Decimal = Field(
        ...,
        description="Share of fortnightly income, one decimal place"
    )


class CategoryBreakdown(BaseModel):
    """
    Fortnightly totals for every allocation category.

    Always carries all three categories, even when one is empty.
    """

    expense: CategoryAmount
    saving: CategoryAmount
    investment: CategoryAmount

    def __getitem__(self, category: str) -> CategoryAmount:
        return getattr(self, AllocationCategory(category).value)

    @property
    def total_amount(self) -> Decimal:
        return self.expense.amount + self.saving.amount + self.investment.amount

    @property
    def total_percentage(self) -> Decimal:
        return (
            self.expense.percentage
            + self.saving.percentage
            + self.investment.percentage
        )


class AllocationProgress(BaseModel):
    """
    How far an allocation is towards its total, and whether the savings
    are keeping pace with the fortnights elapsed since it was created.
    """

    progress_percentage: Decimal = Field(
        ...,
        ge=0,
        le=100,
        description="Saved / total, clamped to 0-100 for display"
    )
    remaining_to_save: Decimal = Field(
        ...,
        description="Total minus saved. Negative when over-saved."
    )
    fortnights_until_due: Optional[int] = Field(
        default=None,
        ge=0,
        description="None when the allocation has no due date"
    )
    fortnights_elapsed: int = Field(..., ge=0)
    expected_saved: Decimal
    on_track: bool


class BudgetSummary(BaseModel):
    """Everything the dashboard shows in its hero section."""

    income_amount: Decimal
    total_allocated: Decimal
    safe_to_spend: Decimal
    breakdown: CategoryBreakdown
    total_balance: Decimal
    active_allocation_count: int = Field(..., ge=0)
    needs_income_setup: bool = Field(
        default=False,
        description="True when no income has been entered yet"
    )
