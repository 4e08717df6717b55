"""
Audit Logger

DESIGN DECISION: Every change to a budget record is logged.
This provides:
1. A readable history of income and allocation changes
2. Debugging capability when a total looks wrong

The audit logger:
- Is async to match the storage interface
- Gracefully handles failures (doesn't crash the app if logging fails)
"""

import logging
from datetime import date
from decimal import Decimal
from functools import lru_cache
from typing import Optional
from uuid import UUID

import structlog

from fortnight_budget.config import get_settings
from fortnight_budget.models.audit import AuditEvent, AuditEventBuilder
from fortnight_budget.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


@lru_cache()
def configure_logging(log_level: Optional[str] = None) -> None:
    """
    Set the stdlib level that structlog filters on.

    Runs once per level, the first time an AuditLogger is built, so a bad
    LOG_LEVEL surfaces there rather than at import.
    """
    level = log_level or get_settings().log_level
    logging.basicConfig(format="%(message)s", level=getattr(logging, level))


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage (for persistence and user visibility)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        configure_logging()
        self._storage = storage
        self._logger = structlog.get_logger(__name__)

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_income_updated(self, amount: Decimal, next_pay_date: date) -> None:
        await self.log(AuditEventBuilder.income_updated(amount, next_pay_date))

    async def log_pay_date_advanced(self, previous: date, current: date) -> None:
        await self.log(AuditEventBuilder.pay_date_advanced(previous, current))

    async def log_allocation_saved(
        self,
        allocation_id: UUID,
        name: str,
        is_new: bool,
    ) -> None:
        await self.log(AuditEventBuilder.allocation_saved(allocation_id, name, is_new))

    async def log_savings_recorded(
        self,
        allocation_id: UUID,
        previous: Decimal,
        current: Decimal,
    ) -> None:
        await self.log(
            AuditEventBuilder.savings_recorded(allocation_id, previous, current)
        )

    async def log_allocation_archived(self, allocation_id: UUID, name: str) -> None:
        await self.log(AuditEventBuilder.allocation_archived(allocation_id, name))

    async def log_allocation_deleted(self, allocation_id: UUID, name: str) -> None:
        await self.log(AuditEventBuilder.allocation_deleted(allocation_id, name))

    async def log_due_date_advanced(
        self,
        allocation_id: UUID,
        previous: date,
        current: date,
    ) -> None:
        await self.log(
            AuditEventBuilder.due_date_advanced(allocation_id, previous, current)
        )

    async def log_summary_calculated(
        self,
        safe_to_spend: Decimal,
        active_allocations: int,
    ) -> None:
        await self.log(
            AuditEventBuilder.summary_calculated(safe_to_spend, active_allocations)
        )

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        await self.log(
            AuditEventBuilder.system_error(error_type, error_message, details)
        )
