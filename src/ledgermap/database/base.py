"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from ledgermap.domain.entities import (
    Account,
    Category,
    DerivedLabels,
    Mapping,
    NewTransaction,
    Transaction,
    TransactionFilter,
    TransactionView,
    UploadRecord,
    User,
)


class Database(ABC):
    """Abstract database interface for ledgermap."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Seeding operations (users, accounts and categories are managed elsewhere)
    @abstractmethod
    def create_user(self, name: str) -> str:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def create_account(
        self,
        name: str,
        owner_ids: list[str],
        institution: Optional[str] = None,
        account_number: Optional[str] = None,
        routing_number: Optional[str] = None,
    ) -> str:
        """Create an account owned by the given users. Returns account ID."""
        pass

    @abstractmethod
    def add_account_owner(self, account_id: str, user_id: str) -> None:
        """Add a user to an account's owner set."""
        pass

    @abstractmethod
    def create_category(
        self, name: str, description: Optional[str] = None, user_id: Optional[str] = None
    ) -> str:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def assign_category(self, transaction_id: str, category_id: Optional[str]) -> None:
        """Set or clear a transaction's structured category."""
        pass

    # Ownership-scoped lookups
    @abstractmethod
    def get_owned_account(self, account_id: str, user_id: str) -> Optional[Account]:
        """Get an account only if ``user_id`` is one of its owners."""
        pass

    @abstractmethod
    def get_owned_upload_record(self, upload_record_id: str, user_id: str) -> Optional[UploadRecord]:
        """Get an upload record only if it belongs to ``user_id``."""
        pass

    # Upload record operations
    @abstractmethod
    def create_upload(
        self,
        user_id: str,
        account_id: str,
        mapping: Mapping,
        available_columns: list[str],
        transactions: list[NewTransaction],
    ) -> str:
        """Persist an upload record and its transactions atomically.

        Returns:
            The new upload record ID
        """
        pass

    @abstractmethod
    def list_upload_transactions(self, upload_record_id: str) -> list[Transaction]:
        """List every transaction linked to an upload record."""
        pass

    @abstractmethod
    def update_upload_mapping(
        self,
        upload_record_id: str,
        mapping: Mapping,
        labels: dict[str, DerivedLabels],
    ) -> UploadRecord:
        """Store a new mapping and rewrite transaction labels atomically.

        Args:
            upload_record_id: Upload record to update
            mapping: The new mapping
            labels: Re-derived labels keyed by transaction ID
        """
        pass

    @abstractmethod
    def get_upload_stats(self, upload_record_id: str) -> tuple[int, Optional[str]]:
        """Return (transaction count, name of a linked account or None)."""
        pass

    @abstractmethod
    def delete_upload(self, upload_record_id: str) -> int:
        """Delete an upload record and its transactions. Returns deleted count."""
        pass

    # Transaction operations
    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def query_transactions(
        self,
        user_id: str,
        transaction_filter: TransactionFilter,
        offset: int,
        limit: int,
    ) -> tuple[list[TransactionView], int]:
        """Query transactions on accounts owned by ``user_id``.

        Returns:
            The requested page ordered by date descending, and the total
            number of matches before pagination
        """
        pass

    @abstractmethod
    def get_category(self, category_id: str) -> Optional[Category]:
        """Get category by ID."""
        pass
