"""Domain layer for brokerledger."""

from brokerledger.domain.entities import (
    Account,
    AccountKind,
    AccountMetadata,
    Import,
    ImportResult,
    Manifest,
    Platform,
    Transaction,
)
from brokerledger.domain.errors import (
    DataError,
    IntegrityError,
    LedgerImportError,
    PersistenceError,
    StructuralError,
)

__all__ = [
    "Account",
    "AccountKind",
    "AccountMetadata",
    "Import",
    "ImportResult",
    "Manifest",
    "Platform",
    "Transaction",
    "DataError",
    "IntegrityError",
    "LedgerImportError",
    "PersistenceError",
    "StructuralError",
]
