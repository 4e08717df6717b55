"""
Audit Models for Fortnight Budget

Every change to an income, allocation or schedule is logged.
This provides:
1. A history the user can read back
2. Debugging information when a total looks wrong

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Income
    INCOME_UPDATED = "income_updated"
    PAY_DATE_ADVANCED = "pay_date_advanced"

    # Allocations
    ALLOCATION_SAVED = "allocation_saved"
    SAVINGS_RECORDED = "savings_recorded"
    ALLOCATION_ARCHIVED = "allocation_archived"
    ALLOCATION_DELETED = "allocation_deleted"
    DUE_DATE_ADVANCED = "due_date_advanced"

    # Read side
    SUMMARY_CALCULATED = "summary_calculated"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What record is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="'income', 'allocation' or 'summary'"
    )
    entity_id: Optional[str] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.income_updated(amount, next_pay_date)
        event = AuditEventBuilder.allocation_archived(allocation_id, name)
    """

    @staticmethod
    def income_updated(amount: Decimal, next_pay_date: date) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INCOME_UPDATED,
            entity_type="income",
            entity_id="default",
            description=f"Income set to ${amount} per fortnight",
            details={
                "amount": str(amount),
                "next_pay_date": next_pay_date.isoformat(),
            },
            is_user_action=True,
        )

    @staticmethod
    def pay_date_advanced(previous: date, current: date) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PAY_DATE_ADVANCED,
            entity_type="income",
            entity_id="default",
            description=f"Next pay date moved to {current.isoformat()}",
            details={
                "previous": previous.isoformat(),
                "current": current.isoformat(),
            },
        )

    @staticmethod
    def allocation_saved(allocation_id: UUID, name: str, is_new: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ALLOCATION_SAVED,
            entity_type="allocation",
            entity_id=str(allocation_id),
            description=f"Allocation {'created' if is_new else 'updated'}: {name}",
            details={"is_new": is_new},
            is_user_action=True,
        )

    @staticmethod
    def savings_recorded(
        allocation_id: UUID,
        previous: Decimal,
        current: Decimal,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVINGS_RECORDED,
            entity_type="allocation",
            entity_id=str(allocation_id),
            description=f"Amount saved changed from ${previous} to ${current}",
            details={
                "previous": str(previous),
                "current": str(current),
            },
            is_user_action=True,
        )

    @staticmethod
    def allocation_archived(allocation_id: UUID, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ALLOCATION_ARCHIVED,
            entity_type="allocation",
            entity_id=str(allocation_id),
            description=f"Allocation archived: {name}",
            is_user_action=True,
        )

    @staticmethod
    def allocation_deleted(allocation_id: UUID, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ALLOCATION_DELETED,
            severity=AuditSeverity.WARNING,
            entity_type="allocation",
            entity_id=str(allocation_id),
            description=f"Allocation deleted: {name}",
            is_user_action=True,
        )

    @staticmethod
    def due_date_advanced(
        allocation_id: UUID,
        previous: date,
        current: date,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DUE_DATE_ADVANCED,
            entity_type="allocation",
            entity_id=str(allocation_id),
            description=f"Due date moved to {current.isoformat()}",
            details={
                "previous": previous.isoformat(),
                "current": current.isoformat(),
            },
        )

    @staticmethod
    def summary_calculated(
        safe_to_spend: Decimal,
        active_allocations: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUMMARY_CALCULATED,
            severity=AuditSeverity.DEBUG,
            entity_type="summary",
            description=f"Safe to spend calculated: ${safe_to_spend}",
            details={
                "safe_to_spend": str(safe_to_spend),
                "active_allocations": active_allocations,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
