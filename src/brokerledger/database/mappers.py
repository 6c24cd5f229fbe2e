"""Mapper functions to convert between domain models and SQLAlchemy models.

Timestamps are stored as naive UTC; the mappers attach and strip the UTC
zone at this boundary.
"""

from datetime import UTC, datetime
from typing import Optional

from brokerledger.domain import entities as domain
from brokerledger.database.models import (
    Account as ORMAccount,
    ImportRecord as ORMImportRecord,
    Transaction as ORMTransaction,
)


def to_storage_time(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC for storage."""
    return value.astimezone(UTC).replace(tzinfo=None)


def from_storage_time(value: datetime) -> datetime:
    """Convert a stored naive UTC datetime to an aware one."""
    return value.replace(tzinfo=UTC)


def import_to_domain(orm_import: ORMImportRecord) -> domain.Import:
    """Convert SQLAlchemy ImportRecord model to domain Import entity."""
    return domain.Import(
        id=orm_import.id,
        filename=orm_import.filename,
        platform_id=orm_import.platform_id,
        generation_date=from_storage_time(orm_import.generation_date),
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    kind: Optional[domain.AccountKind] = None
    if orm_account.kind is not None:
        kind = domain.AccountKind.from_id(orm_account.kind)
        if kind is None:
            raise ValueError(f"unrecognised account kind: {orm_account.kind}")
    return domain.Account(
        id=orm_account.id,
        platform_id=orm_account.platform_id,
        import_id=orm_account.import_id,
        label=orm_account.label,
        kind=kind,
    )


def account_to_orm(account: domain.Account) -> ORMAccount:
    """Convert domain Account entity to a new SQLAlchemy Account row."""
    return ORMAccount(
        id=account.id,
        platform_id=account.platform_id,
        import_id=account.import_id,
        label=account.label,
        kind=account.kind.id if account.kind is not None else None,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        execution_time=from_storage_time(orm_transaction.execution_time),
        ticker_symbol=orm_transaction.ticker_symbol,
        unit_quantity=orm_transaction.unit_quantity,
        cost_per_unit=orm_transaction.cost_per_unit,
        currency_symbol=orm_transaction.currency_symbol,
        account_id=orm_transaction.account_id,
        import_id=orm_transaction.import_id,
    )


def transaction_to_orm(transaction: domain.Transaction) -> ORMTransaction:
    """Convert domain Transaction entity to a new SQLAlchemy Transaction row."""
    return ORMTransaction(
        execution_time=to_storage_time(transaction.execution_time),
        ticker_symbol=transaction.ticker_symbol,
        unit_quantity=transaction.unit_quantity,
        cost_per_unit=transaction.cost_per_unit,
        currency_symbol=transaction.currency_symbol,
        account_id=transaction.account_id,
        import_id=transaction.import_id,
    )
