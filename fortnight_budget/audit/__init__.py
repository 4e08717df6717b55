"""Audit logging package."""

from fortnight_budget.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
