"""
Flow tests for BudgetService against in-memory storage.

Async flows are driven with asyncio.run so no event loop plugin is needed.
"""

import asyncio
import importlib

import pytest
from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

from fortnight_budget.audit import AuditLogger
from fortnight_budget.audit import logger as audit_logger_module
from fortnight_budget.config import AppSettings, get_settings
from fortnight_budget.models.audit import AuditEventBuilder, AuditEventType
from fortnight_budget.models.budget import (
    Account,
    Allocation,
    AllocationCategory,
    BankType,
    FrequencyType,
    Income,
)
from fortnight_budget.service import BudgetService
from fortnight_budget.storage import (
    AuditStorageInterface,
    InMemoryAuditStorage,
    InMemoryBudgetStorage,
    NotFoundError,
)


TODAY = date(2024, 1, 20)


def build_service():
    storage = InMemoryBudgetStorage()
    asyncio.run(storage.initialize(AppSettings()))
    audit_storage = InMemoryAuditStorage()
    service = BudgetService(storage, AuditLogger(audit_storage))
    return service, storage, audit_storage


def add(storage, **overrides):
    fields = {
        "name": "Rent",
        "category": AllocationCategory.EXPENSE,
        "total_amount": Decimal("500"),
        "frequency": FrequencyType.FORTNIGHTLY,
        "created_at": TODAY,
    }
    fields.update(overrides)
    allocation = Allocation(**fields)
    asyncio.run(storage.add_allocation(allocation))
    return allocation


def event_types(audit_storage):
    events = asyncio.run(audit_storage.get_recent_events())
    return [e.event_type for e in events]


class FailingAuditStorage(AuditStorageInterface):
    async def append_event(self, event):
        raise RuntimeError("audit backend down")

    async def get_recent_events(self, limit=100):
        return []


class TestSummary:
    """Tests for BudgetService.get_summary."""

    def test_fresh_budget_needs_income(self):
        service, _, _ = build_service()
        summary = asyncio.run(service.get_summary(TODAY))

        assert summary.needs_income_setup is True
        assert summary.income_amount == 0
        assert summary.safe_to_spend == 0
        assert summary.active_allocation_count == 0

    def test_summary_without_income_row(self):
        service = BudgetService(InMemoryBudgetStorage())
        summary = asyncio.run(service.get_summary(TODAY))
        assert summary.needs_income_setup is True

    def test_summary_totals(self):
        service, storage, audit_storage = build_service()
        asyncio.run(service.update_income(Decimal("2000"), TODAY))
        add(storage)
        add(storage, name="Old gym", is_active=False)
        add(
            storage,
            name="Holiday",
            category=AllocationCategory.SAVING,
            total_amount=Decimal("2600"),
            frequency=FrequencyType.YEARLY,
        )
        asyncio.run(storage.save_account(
            Account(name="Spending", bank=BankType.UP, current_balance=Decimal("300"))
        ))

        summary = asyncio.run(service.get_summary(TODAY))

        assert summary.needs_income_setup is False
        assert summary.income_amount == Decimal("2000")
        assert summary.total_allocated == Decimal("600")
        assert summary.safe_to_spend == Decimal("1400")
        assert summary.breakdown.expense.percentage == Decimal("25.0")
        assert summary.breakdown.saving.percentage == Decimal("5.0")
        assert summary.total_balance == Decimal("300")
        assert summary.active_allocation_count == 2
        assert event_types(audit_storage)[0] == AuditEventType.SUMMARY_CALCULATED


class TestAllocationChanges:
    """Tests for progress lookups and allocation mutations."""

    def test_allocation_progress(self):
        service, storage, _ = build_service()
        allocation = add(
            storage,
            total_amount=Decimal("100"),
            amount_already_saved=Decimal("150"),
            created_at=TODAY - timedelta(days=28),
        )

        progress = asyncio.run(service.get_allocation_progress(allocation.id, TODAY))
        assert progress.progress_percentage == Decimal("100")
        assert progress.on_track is False

    def test_progress_for_missing_allocation(self):
        service, _, _ = build_service()
        with pytest.raises(NotFoundError):
            asyncio.run(service.get_allocation_progress(uuid4(), TODAY))

    def test_add_allocation_is_audited(self):
        service, storage, audit_storage = build_service()
        allocation = Allocation(
            name="Phone",
            category=AllocationCategory.EXPENSE,
            total_amount=Decimal("45"),
            frequency=FrequencyType.MONTHLY,
        )
        asyncio.run(service.add_allocation(allocation))

        assert asyncio.run(storage.get_allocation(allocation.id)) is not None
        assert event_types(audit_storage) == [AuditEventType.ALLOCATION_SAVED]

    def test_record_savings(self):
        service, storage, audit_storage = build_service()
        allocation = add(storage)

        updated = asyncio.run(service.record_savings(allocation.id, Decimal("120")))

        assert updated.amount_already_saved == Decimal("120")
        stored = asyncio.run(storage.get_allocation(allocation.id))
        assert stored.amount_already_saved == Decimal("120")
        assert event_types(audit_storage) == [AuditEventType.SAVINGS_RECORDED]

    def test_record_negative_savings_is_rejected(self):
        service, storage, _ = build_service()
        allocation = add(storage)
        with pytest.raises(ValueError):
            asyncio.run(service.record_savings(allocation.id, Decimal("-1")))

    def test_archive_removes_from_totals(self):
        service, storage, audit_storage = build_service()
        asyncio.run(service.update_income(Decimal("2000"), TODAY))
        allocation = add(storage)

        archived = asyncio.run(service.archive_allocation(allocation.id))
        summary = asyncio.run(service.get_summary(TODAY))

        assert archived.is_active is False
        assert asyncio.run(storage.get_allocation(allocation.id)) is not None
        assert summary.safe_to_spend == Decimal("2000")
        assert AuditEventType.ALLOCATION_ARCHIVED in event_types(audit_storage)

    def test_update_allocation(self):
        service, storage, audit_storage = build_service()
        allocation = add(storage)

        edited = allocation.model_copy(update={
            "name": "Rent (new lease)",
            "total_amount": Decimal("550"),
        })
        stored = asyncio.run(service.update_allocation(edited))

        assert stored.total_amount == Decimal("550")
        fetched = asyncio.run(storage.get_allocation(allocation.id))
        assert fetched.name == "Rent (new lease)"

        events = asyncio.run(audit_storage.get_recent_events())
        assert events[0].event_type == AuditEventType.ALLOCATION_SAVED
        assert events[0].details == {"is_new": False}

    def test_update_missing_allocation(self):
        service, _, audit_storage = build_service()
        stray = Allocation(
            category=AllocationCategory.EXPENSE,
            total_amount=Decimal("10"),
            frequency=FrequencyType.WEEKLY,
        )
        with pytest.raises(NotFoundError):
            asyncio.run(service.update_allocation(stray))
        assert event_types(audit_storage) == [AuditEventType.SYSTEM_ERROR]

    def test_delete_allocation(self):
        service, storage, audit_storage = build_service()
        allocation = add(storage)

        asyncio.run(service.delete_allocation(allocation.id))

        assert asyncio.run(storage.get_allocation(allocation.id)) is None
        assert event_types(audit_storage) == [AuditEventType.ALLOCATION_DELETED]

    def test_delete_missing_allocation_is_logged(self):
        service, _, audit_storage = build_service()
        missing_id = uuid4()
        with pytest.raises(NotFoundError):
            asyncio.run(service.delete_allocation(missing_id))

        events = asyncio.run(audit_storage.get_recent_events())
        assert events[0].event_type == AuditEventType.SYSTEM_ERROR
        assert events[0].details["allocation_id"] == str(missing_id)

    def test_archive_twice_is_noop(self):
        service, storage, audit_storage = build_service()
        allocation = add(storage)
        asyncio.run(service.archive_allocation(allocation.id))
        asyncio.run(service.archive_allocation(allocation.id))

        archived_events = [
            t for t in event_types(audit_storage)
            if t == AuditEventType.ALLOCATION_ARCHIVED
        ]
        assert len(archived_events) == 1


class TestIncome:
    """Tests for BudgetService.update_income."""

    def test_update_income(self):
        service, storage, audit_storage = build_service()
        income = asyncio.run(service.update_income(Decimal("2450.50"), date(2024, 2, 1)))

        assert income.amount == Decimal("2450.50")
        stored = asyncio.run(storage.get_income())
        assert stored.next_pay_date == date(2024, 2, 1)
        assert event_types(audit_storage) == [AuditEventType.INCOME_UPDATED]

    def test_negative_income_is_rejected(self):
        service, _, _ = build_service()
        with pytest.raises(ValueError):
            asyncio.run(service.update_income(Decimal("-5"), TODAY))


class TestAdvanceSchedules:
    """Tests for BudgetService.advance_schedules."""

    def test_rolls_past_dates_forward(self):
        service, storage, audit_storage = build_service()
        asyncio.run(storage.save_income(
            Income(amount=Decimal("2000"), next_pay_date=date(2024, 1, 1))
        ))
        overdue = add(
            storage,
            frequency=FrequencyType.MONTHLY,
            due_date=date(2024, 1, 10),
        )
        upcoming = add(storage, due_date=date(2024, 1, 25))
        goal = add(storage, due_date=None)
        archived = add(storage, due_date=date(2024, 1, 1), is_active=False)

        changed = asyncio.run(service.advance_schedules(TODAY))

        assert changed == 2
        income = asyncio.run(storage.get_income())
        assert income.next_pay_date == date(2024, 1, 29)

        def due(allocation):
            return asyncio.run(storage.get_allocation(allocation.id)).due_date

        assert due(overdue) == date(2024, 2, 10)
        assert due(upcoming) == date(2024, 1, 25)
        assert due(goal) is None
        assert due(archived) == date(2024, 1, 1)

        types = event_types(audit_storage)
        assert AuditEventType.PAY_DATE_ADVANCED in types
        assert AuditEventType.DUE_DATE_ADVANCED in types

    def test_nothing_to_advance(self):
        service, storage, _ = build_service()
        asyncio.run(storage.save_income(Income(next_pay_date=TODAY)))
        assert asyncio.run(service.advance_schedules(TODAY)) == 0


class TestAuditLogger:
    """Tests for AuditLogger failure handling."""

    def test_storage_failure_does_not_raise(self):
        logger = AuditLogger(FailingAuditStorage())
        service = BudgetService(InMemoryBudgetStorage(), logger)
        income = asyncio.run(service.update_income(Decimal("100"), TODAY))
        assert income.amount == Decimal("100")

    def test_local_only_logging(self):
        logger = AuditLogger()
        event = AuditEventBuilder.system_error("Boom", "something broke")
        assert asyncio.run(logger.log(event)) is True

    def test_bad_log_level_surfaces_on_first_logger(self, monkeypatch):
        """An invalid LOG_LEVEL must not break importing the package."""
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        get_settings.cache_clear()
        try:
            module = importlib.reload(audit_logger_module)
            with pytest.raises(ValueError):
                module.AuditLogger()
        finally:
            monkeypatch.delenv("LOG_LEVEL")
            get_settings.cache_clear()
            importlib.reload(audit_logger_module)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
