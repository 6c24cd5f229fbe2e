"""Database layer for brokerledger."""

from brokerledger.database.base import Database
from brokerledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
