"""
Abstract Storage Interface

DESIGN DECISION: The calculation core never talks to storage. Everything
that reads or writes records goes through these interfaces, which lets us:
1. Run the whole budget in memory for tests
2. Swap in a local embedded database or a remote backend later
3. Keep the single "default" income and settings rows behind an
   explicit repository rather than in global state

The interface is intentionally small - just the operations the
budget service needs.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from fortnight_budget.models.audit import AuditEvent
from fortnight_budget.models.budget import (
    Account,
    Allocation,
    AllocationCategory,
    BudgetSettings,
    Income,
)


class BudgetStorageInterface(ABC):
    """
    Abstract interface for budget record storage.

    Any storage implementation must implement these methods.
    """

    # -- Single-row records ---------------------------------------------------

    @abstractmethod
    async def get_income(self) -> Optional[Income]:
        """
        Retrieve the "default" income record.

        Returns:
            The income if one has been stored, None otherwise
        """
        pass

    @abstractmethod
    async def save_income(self, income: Income) -> Income:
        """
        Insert or replace the "default" income record.

        Returns:
            The stored income with updated_at refreshed
        """
        pass

    @abstractmethod
    async def get_settings(self) -> Optional[BudgetSettings]:
        """Retrieve the "default" settings record."""
        pass

    @abstractmethod
    async def save_settings(self, settings: BudgetSettings) -> BudgetSettings:
        """Insert or replace the "default" settings record."""
        pass

    # -- Accounts -------------------------------------------------------------

    @abstractmethod
    async def list_accounts(self) -> list[Account]:
        """
        List every account.

        Returns:
            Accounts sorted by their display order
        """
        pass

    @abstractmethod
    async def save_account(self, account: Account) -> Account:
        """
        Insert or replace an account.

        A new account saved without an explicit order is placed after
        the existing ones (order = current account count).

        Raises:
            StorageError: If save fails
        """
        pass

    @abstractmethod
    async def delete_account(self, account_id: UUID) -> bool:
        """
        Delete an account by ID.

        Returns:
            True if something was deleted
        """
        pass

    # -- Allocations ----------------------------------------------------------

    @abstractmethod
    async def get_allocation(self, allocation_id: UUID) -> Optional[Allocation]:
        """
        Retrieve an allocation by its ID.

        Returns:
            The allocation if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_allocations(
        self,
        category: Optional[AllocationCategory] = None,
        active_only: bool = False,
    ) -> list[Allocation]:
        """
        List allocations with optional filters.

        Args:
            category: Only return allocations in this category
            active_only: Skip archived allocations

        Returns:
            List of matching allocations
        """
        pass

    @abstractmethod
    async def add_allocation(self, allocation: Allocation) -> Allocation:
        """
        Store a new allocation.

        Raises:
            DuplicateError: If an allocation with the same ID exists
        """
        pass

    @abstractmethod
    async def update_allocation(self, allocation: Allocation) -> Allocation:
        """
        Replace an existing allocation.

        Returns:
            The stored allocation with updated_at refreshed

        Raises:
            NotFoundError: If the allocation doesn't exist
        """
        pass

    @abstractmethod
    async def delete_allocation(self, allocation_id: UUID) -> bool:
        """
        Physically delete an allocation.

        Prefer archiving (is_active=False); deleting loses its history.

        Returns:
            True if something was deleted
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
