"""Transaction commands."""

import click
from brokerledger.cli.context import get_db


@click.group()
def transaction_group():
    """Inspect imported transactions."""
    pass


@transaction_group.command("list")
@click.option("--account", "account_id", help="Only transactions for this account id")
@click.pass_context
def list_transactions(ctx, account_id: str | None):
    """List imported transactions, oldest first.

    Examples:
        brokerledger transaction list
        brokerledger transaction list --account VG123
    """
    db = get_db(ctx)

    transactions = db.list_transactions(account_id=account_id)
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo("\nTransactions:")
    click.echo("-" * 80)
    for txn in transactions:
        click.echo(
            f"{txn.execution_time:%Y-%m-%d %H:%M} | {txn.account_id:10s} | "
            f"{txn.ticker_symbol:6s} | {txn.unit_quantity:>12.4f} @ "
            f"{txn.cost_per_unit:>10.4f} {txn.currency_symbol}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
