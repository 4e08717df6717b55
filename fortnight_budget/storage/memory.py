"""
In-Memory Storage

A dictionary-backed implementation of the storage interfaces. Used by
tests and by anything that wants a throwaway budget.

Records are copied on the way in and on the way out, so callers can
never mutate what is stored by holding on to a returned object.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fortnight_budget.config import AppSettings, get_settings
from fortnight_budget.models.audit import AuditEvent
from fortnight_budget.models.budget import (
    Account,
    Allocation,
    AllocationCategory,
    BudgetSettings,
    Income,
)
from fortnight_budget.storage.interface import (
    AuditStorageInterface,
    BudgetStorageInterface,
    DuplicateError,
    NotFoundError,
)


class InMemoryBudgetStorage(BudgetStorageInterface):
    """Budget storage held in process memory."""

    def __init__(self):
        self._income: Optional[Income] = None
        self._settings: Optional[BudgetSettings] = None
        self._accounts: dict[UUID, Account] = {}
        self._allocations: dict[UUID, Allocation] = {}

    async def initialize(self, app_settings: Optional[AppSettings] = None) -> None:
        """
        Create the "default" settings and income rows if they are missing.

        A fresh income has amount 0, which the dashboard treats as
        "income not set up yet".
        """
        app_settings = app_settings or get_settings()

        if self._settings is None:
            self._settings = BudgetSettings(
                currency=app_settings.default_currency,
                date_format=app_settings.default_date_format,
                theme=app_settings.default_theme,
            )

        if self._income is None:
            self._income = Income()

    async def get_income(self) -> Optional[Income]:
        return self._income.model_copy() if self._income else None

    async def save_income(self, income: Income) -> Income:
        self._income = income.model_copy(update={"updated_at": datetime.utcnow()})
        return self._income.model_copy()

    async def get_settings(self) -> Optional[BudgetSettings]:
        return self._settings.model_copy() if self._settings else None

    async def save_settings(self, settings: BudgetSettings) -> BudgetSettings:
        self._settings = settings.model_copy()
        return self._settings.model_copy()

    async def list_accounts(self) -> list[Account]:
        accounts = sorted(self._accounts.values(), key=lambda a: a.order)
        return [a.model_copy() for a in accounts]

    async def save_account(self, account: Account) -> Account:
        update = {"updated_at": datetime.utcnow()}
        # New accounts without an explicit position go to the end
        if account.id not in self._accounts and "order" not in account.model_fields_set:
            update["order"] = len(self._accounts)
        stored = account.model_copy(update=update)
        self._accounts[account.id] = stored
        return stored.model_copy()

    async def delete_account(self, account_id: UUID) -> bool:
        return self._accounts.pop(account_id, None) is not None

    async def get_allocation(self, allocation_id: UUID) -> Optional[Allocation]:
        allocation = self._allocations.get(allocation_id)
        return allocation.model_copy() if allocation else None

    async def list_allocations(
        self,
        category: Optional[AllocationCategory] = None,
        active_only: bool = False,
    ) -> list[Allocation]:
        results = []
        for allocation in self._allocations.values():
            if active_only and not allocation.is_active:
                continue
            if category is not None and allocation.category != category:
                continue
            results.append(allocation.model_copy())
        return results

    async def add_allocation(self, allocation: Allocation) -> Allocation:
        if allocation.id in self._allocations:
            raise DuplicateError(f"Allocation {allocation.id} already exists")
        self._allocations[allocation.id] = allocation.model_copy()
        return allocation.model_copy()

    async def update_allocation(self, allocation: Allocation) -> Allocation:
        if allocation.id not in self._allocations:
            raise NotFoundError(f"Allocation {allocation.id} not found")
        stored = allocation.model_copy(update={"updated_at": datetime.utcnow()})
        self._allocations[allocation.id] = stored
        return stored.model_copy()

    async def delete_allocation(self, allocation_id: UUID) -> bool:
        return self._allocations.pop(allocation_id, None) is not None


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only audit log held in process memory."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
