"""
Budget Service for Fortnight Budget

This module ties storage, the calculation core and auditing together
for the dashboard and allocation screens:
1. Summary (fetch income + allocations + accounts -> safe to spend)
2. Progress (fetch one allocation -> progress and pacing)
3. Changes (income, savings, editing, archiving, deleting) with an audit trail
4. Schedule upkeep (roll past pay and due dates forward)

DESIGN DECISION: The service is the only place that awaits storage.
The calculation functions it calls stay pure and synchronous.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

import structlog

from fortnight_budget.audit import AuditLogger
from fortnight_budget.calculations import (
    allocation_progress,
    category_breakdown,
    next_pay_date,
    roll_forward,
    safe_to_spend,
    total_allocated,
    total_balance,
)
from fortnight_budget.models.budget import Allocation, Income
from fortnight_budget.models.results import AllocationProgress, BudgetSummary
from fortnight_budget.storage import BudgetStorageInterface, NotFoundError


logger = structlog.get_logger(__name__)


class BudgetService:
    """
    Dashboard-facing operations over a budget store.

    Every mutation is written back through storage and audited;
    records passed in by callers are never modified in place.
    """

    def __init__(
        self,
        storage: BudgetStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger

    async def get_summary(self, today: Optional[date] = None) -> BudgetSummary:
        """
        Build the dashboard summary.

        A missing or zero income is reported through needs_income_setup
        rather than as an error, so the dashboard can prompt for it.
        """
        income = await self._storage.get_income()
        needs_income_setup = income is None or income.amount == 0
        if income is None:
            income = Income(next_pay_date=today or date.today())

        allocations = await self._storage.list_allocations(active_only=True)
        accounts = await self._storage.list_accounts()

        summary = BudgetSummary(
            income_amount=income.amount,
            total_allocated=total_allocated(allocations),
            safe_to_spend=safe_to_spend(income, allocations),
            breakdown=category_breakdown(income, allocations),
            total_balance=total_balance(accounts),
            active_allocation_count=len(allocations),
            needs_income_setup=needs_income_setup,
        )

        if self._audit_logger:
            await self._audit_logger.log_summary_calculated(
                safe_to_spend=summary.safe_to_spend,
                active_allocations=summary.active_allocation_count,
            )

        return summary

    async def get_allocation_progress(
        self,
        allocation_id: UUID,
        today: Optional[date] = None,
    ) -> AllocationProgress:
        """
        Progress and pacing for one allocation.

        Raises:
            NotFoundError: If the allocation doesn't exist
        """
        allocation = await self._require_allocation(allocation_id)
        return allocation_progress(allocation, today)

    async def add_allocation(self, allocation: Allocation) -> Allocation:
        """Store a new allocation."""
        stored = await self._storage.add_allocation(allocation)
        if self._audit_logger:
            await self._audit_logger.log_allocation_saved(
                stored.id, stored.name, is_new=True
            )
        return stored

    async def update_allocation(self, allocation: Allocation) -> Allocation:
        """
        Replace an existing allocation with an edited copy.

        Raises:
            NotFoundError: If the allocation doesn't exist
        """
        await self._require_allocation(allocation.id)
        stored = await self._storage.update_allocation(allocation)
        if self._audit_logger:
            await self._audit_logger.log_allocation_saved(
                stored.id, stored.name, is_new=False
            )
        return stored

    async def delete_allocation(self, allocation_id: UUID) -> None:
        """
        Permanently remove an allocation.

        Prefer archive_allocation when the history should be kept.

        Raises:
            NotFoundError: If the allocation doesn't exist
        """
        allocation = await self._require_allocation(allocation_id)
        await self._storage.delete_allocation(allocation_id)
        if self._audit_logger:
            await self._audit_logger.log_allocation_deleted(
                allocation.id, allocation.name
            )

    async def update_income(
        self,
        amount: Decimal,
        next_pay_date: date,
    ) -> Income:
        """
        Set the fortnightly income and next pay date.

        Raises:
            pydantic.ValidationError: If amount is negative
        """
        current = await self._storage.get_income() or Income()
        updated = Income.model_validate({
            **current.model_dump(),
            "amount": amount,
            "next_pay_date": next_pay_date,
        })
        stored = await self._storage.save_income(updated)

        if self._audit_logger:
            await self._audit_logger.log_income_updated(
                stored.amount, stored.next_pay_date
            )
        return stored

    async def record_savings(
        self,
        allocation_id: UUID,
        amount_already_saved: Decimal,
    ) -> Allocation:
        """
        Set how much has been put aside for an allocation so far.

        Raises:
            NotFoundError: If the allocation doesn't exist
            pydantic.ValidationError: If the amount is negative
        """
        allocation = await self._require_allocation(allocation_id)
        previous = allocation.amount_already_saved

        updated = Allocation.model_validate({
            **allocation.model_dump(),
            "amount_already_saved": amount_already_saved,
        })
        stored = await self._storage.update_allocation(updated)

        if self._audit_logger:
            await self._audit_logger.log_savings_recorded(
                stored.id, previous, stored.amount_already_saved
            )
        return stored

    async def archive_allocation(self, allocation_id: UUID) -> Allocation:
        """
        Remove an allocation from every total without deleting it.

        Archiving an already archived allocation is a no-op.

        Raises:
            NotFoundError: If the allocation doesn't exist
        """
        allocation = await self._require_allocation(allocation_id)
        if not allocation.is_active:
            return allocation

        stored = await self._storage.update_allocation(
            allocation.model_copy(update={"is_active": False})
        )
        if self._audit_logger:
            await self._audit_logger.log_allocation_archived(stored.id, stored.name)
        return stored

    async def advance_schedules(self, today: Optional[date] = None) -> int:
        """
        Roll the pay date and every past due date forward to today or later.

        Saved amounts are left alone; only the dates move.

        Returns:
            Number of records that changed
        """
        today = today or date.today()
        changed = 0

        income = await self._storage.get_income()
        if income is not None and income.next_pay_date < today:
            previous = income.next_pay_date
            pay_date = previous
            while pay_date < today:
                pay_date = next_pay_date(pay_date)
            await self._storage.save_income(
                income.model_copy(update={"next_pay_date": pay_date})
            )
            changed += 1
            if self._audit_logger:
                await self._audit_logger.log_pay_date_advanced(previous, pay_date)

        for allocation in await self._storage.list_allocations(active_only=True):
            if allocation.due_date is None or allocation.due_date >= today:
                continue
            previous = allocation.due_date
            due_date = roll_forward(previous, allocation.frequency, today)
            await self._storage.update_allocation(
                allocation.model_copy(update={"due_date": due_date})
            )
            changed += 1
            if self._audit_logger:
                await self._audit_logger.log_due_date_advanced(
                    allocation.id, previous, due_date
                )

        logger.info("schedules_advanced", today=today.isoformat(), changed=changed)
        return changed

    async def _require_allocation(self, allocation_id: UUID) -> Allocation:
        allocation = await self._storage.get_allocation(allocation_id)
        if allocation is None:
            message = f"Allocation {allocation_id} not found"
            if self._audit_logger:
                await self._audit_logger.log_error(
                    "NotFoundError",
                    message,
                    details={"allocation_id": str(allocation_id)},
                )
            raise NotFoundError(message)
        return allocation
