"""Main CLI entry point."""

import logging

import click

# Import and register all commands at module level
from brokerledger.cli.commands import account, import_cmd, transaction

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BROKERLEDGER_DB_PATH environment variable)",
    envvar="BROKERLEDGER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
    envvar="BROKERLEDGER_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Brokerledger - investment ledger importer.

    Verify broker spreadsheet exports against their manifests and load the
    accounts and investment transactions they contain into a local database.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)
    # The database is opened by the commands that need it
    ctx.obj["db_path"] = db_path


# Register all commands
account.register_commands(cli)
import_cmd.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
