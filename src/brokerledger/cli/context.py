"""Shared state for CLI commands."""

import click

from brokerledger.cli.error_handling import handle_domain_error
from brokerledger.database.base import Database
from brokerledger.database.factories import create_sqlite_database
from brokerledger.domain.errors import LedgerImportError


def get_db(ctx: click.Context) -> Database:
    """Return the ledger database, opening it on first use.

    Commands that never touch the ledger do not call this, so running them
    leaves no database file behind.
    """
    obj = ctx.ensure_object(dict)
    db = obj.get("db")
    if db is None:
        try:
            db = create_sqlite_database(database_path=obj.get("db_path"))
            db.connect()
            db.initialize_schema()
        except LedgerImportError as e:
            handle_domain_error(ctx, e)
        obj["db"] = db
        ctx.find_root().call_on_close(db.disconnect)
    return db
