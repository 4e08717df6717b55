"""
Data Models Package

This package contains all Pydantic models used in Fortnight Budget.
Records come from storage; results come out of the calculation core.
"""

from fortnight_budget.models.budget import (
    DEFAULT_RECORD_ID,
    Account,
    AccountType,
    Allocation,
    AllocationCategory,
    BankType,
    BudgetSettings,
    FrequencyType,
    Income,
    ThemeType,
)
from fortnight_budget.models.results import (
    AllocationProgress,
    BudgetSummary,
    CategoryAmount,
    CategoryBreakdown,
)
from fortnight_budget.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Budget records
    "DEFAULT_RECORD_ID",
    "Account",
    "AccountType",
    "Allocation",
    "AllocationCategory",
    "BankType",
    "BudgetSettings",
    "FrequencyType",
    "Income",
    "ThemeType",
    # Derived results
    "AllocationProgress",
    "BudgetSummary",
    "CategoryAmount",
    "CategoryBreakdown",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
