"""Account commands."""

import click
from brokerledger.cli.context import get_db


@click.group()
def account_group():
    """Inspect imported accounts."""
    pass


@account_group.command("list")
@click.option("--import-id", help="Only accounts from this import (sha256sum)")
@click.pass_context
def list_accounts(ctx, import_id: str | None):
    """List imported accounts."""
    db = get_db(ctx)

    accounts = db.list_accounts(import_id=import_id)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        kind = acc.kind.id if acc.kind is not None else "-"
        label = acc.label or "-"
        click.echo(f"{acc.id:12s} | {acc.platform_id:12s} | {kind:4s} | {label}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
