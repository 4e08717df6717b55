"""
Core Data Models for Fortnight Budget

These models define the records that the storage layer hands to the
calculation core. They are designed to:
1. Reject invalid amounts and unknown enum values at the boundary
2. Keep money as Decimal end to end
3. Compare dates at calendar-day granularity only

DESIGN DECISION: The calculation core only ever reads these records.
Creating, updating and archiving them is the storage layer's job.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


DEFAULT_RECORD_ID = "default"


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class AllocationCategory(str, Enum):
    """What kind of money an allocation sets aside."""
    EXPENSE = "expense"
    SAVING = "saving"
    INVESTMENT = "investment"


class FrequencyType(str, Enum):
    """
    How often an allocation's total amount falls due.

    DESIGN DECISION: This is a closed set. Anything else is rejected
    when the record is built, so the calculation core never sees it.
    """
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class BankType(str, Enum):
    """Supported banks."""
    UP = "UP"
    ING = "ING"


class AccountType(str, Enum):
    """Role an account plays in the budget."""
    SPENDING = "spending"
    EXPENSES = "expenses"
    SAVINGS = "savings"
    MORTGAGE = "mortgage"
    OFFSET = "offset"
    OTHER = "other"


class ThemeType(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


def _to_calendar_date(value):
    """Drop the time-of-day from datetimes handed to a date field."""
    if isinstance(value, datetime):
        return value.date()
    return value


# =============================================================================
# BUDGET RECORDS
# =============================================================================

class Account(BaseModel):
    """
    A bank account shown on the dashboard.

    Balances may be negative (mortgages), so there is no lower bound.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Account nickname"
    )
    bank: BankType
    type: AccountType = AccountType.OTHER
    current_balance: Decimal = Field(
        default=Decimal("0"),
        decimal_places=2,
        description="Balance as last entered by the user"
    )
    color: str = Field(
        default="#64748b",
        pattern="^#[0-9a-fA-F]{6}$",
        description="Hex colour for visual identification"
    )
    icon: str = Field(default="wallet", max_length=50)
    order: int = Field(
        default=0,
        ge=0,
        description="Display position"
    )
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class Allocation(BaseModel):
    """
    A recurring bill or a savings/investment goal.

    CRITICAL: amount_already_saved is entered by the user, never derived.
    It may exceed total_amount; over-saving is valid.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    # Identity
    id: UUID = Field(
        default_factory=uuid4,
        description="Unique allocation ID"
    )
    name: str = Field(
        default="",
        max_length=200,
        description="e.g. Netflix, Car Insurance, Emergency Fund"
    )
    category: AllocationCategory

    # Amounts
    total_amount: Decimal = Field(
        ...,
        ge=0,
        description="Full cost of the bill or goal"
    )
    amount_already_saved: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Manually updated by the user"
    )

    # Schedule
    frequency: FrequencyType
    due_date: Optional[date] = Field(
        default=None,
        description="When the bill is due or the goal's target date. "
                    "None means a goal with no fixed date."
    )
    created_at: date = Field(
        default_factory=date.today,
        description="Start of the pacing schedule"
    )
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Linking and display
    account_id: Optional[UUID] = None
    color: str = Field(default="#64748b", pattern="^#[0-9a-fA-F]{6}$")
    icon: str = Field(default="receipt", max_length=50)
    notes: Optional[str] = Field(default=None, max_length=1000)

    # Archived allocations stay stored but drop out of every total
    is_active: bool = True

    @field_validator("due_date", "created_at", mode="before")
    @classmethod
    def drop_time_of_day(cls, v):
        return _to_calendar_date(v)


class Income(BaseModel):
    """
    The single fortnightly income.

    DESIGN DECISION: There is exactly one income record, keyed "default".
    Frequency is locked to fortnightly for now.
    """

    id: str = DEFAULT_RECORD_ID
    amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Take-home pay per fortnight"
    )
    frequency: FrequencyType = FrequencyType.FORTNIGHTLY
    next_pay_date: date = Field(default_factory=date.today)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("next_pay_date", mode="before")
    @classmethod
    def drop_time_of_day(cls, v):
        return _to_calendar_date(v)

    @field_validator("frequency")
    @classmethod
    def only_fortnightly(cls, v: FrequencyType) -> FrequencyType:
        if v is not FrequencyType.FORTNIGHTLY:
            raise ValueError("Income frequency must be fortnightly")
        return v


class BudgetSettings(BaseModel):
    """User preferences, stored as a single row keyed "default"."""

    id: str = DEFAULT_RECORD_ID
    currency: str = Field(default="AUD", pattern="^AUD$")
    date_format: str = Field(default="dd/MM/yyyy", max_length=20)
    theme: ThemeType = ThemeType.SYSTEM
    pay_schedule_start: date = Field(
        default_factory=date.today,
        description="First pay date, anchors the fortnight schedule"
    )

    @field_validator("pay_schedule_start", mode="before")
    @classmethod
    def drop_time_of_day(cls, v):
        return _to_calendar_date(v)
