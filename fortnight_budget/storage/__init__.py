"""
Storage Package

Provides abstract interfaces and an in-memory implementation for budget
records. Designed so a real database backend can be dropped in later.
"""

from fortnight_budget.storage.interface import (
    AuditStorageInterface,
    BudgetStorageInterface,
    DuplicateError,
    NotFoundError,
    StorageError,
)
from fortnight_budget.storage.memory import (
    InMemoryAuditStorage,
    InMemoryBudgetStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "BudgetStorageInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryBudgetStorage",
]
