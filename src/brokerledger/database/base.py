"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from brokerledger.domain.entities import Account, Import, Transaction


class Database(ABC):
    """Abstract database interface for brokerledger.

    Implementations raise PersistenceError for constraint violations and
    connectivity failures.
    """

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
        """Initialize database schema and seed the platform lookup table."""
        pass

    # Import operations
    @abstractmethod
    def create_import(self, import_record: Import) -> Import:
        """Insert an import record. Fails if the id already exists."""
        pass

    @abstractmethod
    def get_import(self, import_id: str) -> Optional[Import]:
        """Get import by ID."""
        pass

    @abstractmethod
    def list_imports(self) -> list[Import]:
        """List all imports ordered by generation date."""
        pass

    # Account operations
    @abstractmethod
    def create_accounts(self, accounts: list[Account]) -> list[Account]:
        """Insert accounts. Fails if any id already exists."""
        pass

    @abstractmethod
    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, import_id: Optional[str] = None) -> list[Account]:
        """List accounts, optionally filtered by import."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(self, transaction: Transaction) -> Transaction:
        """Insert a transaction. Returns it with the store-assigned id."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        account_id: Optional[str] = None,
        import_id: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions ordered by execution time, with optional filters."""
        pass
