"""Account ledger command."""

import click
from ledgerbook.cli.date_filters import period_options, resolve_cli_date_range
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.cli.formatting import format_amount, format_balance
from ledgerbook.cli.resolution import resolve_account_or_exit, resolve_book_or_exit
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.report import ReportService


@click.command("ledger")
@click.argument("account", metavar="ACCOUNT")
@click.option("--start-date", help="Window start; earlier entries form the opening balance")
@click.option("--end-date", help="Window end (inclusive)")
@period_options
@click.pass_context
def ledger(ctx, account: str, start_date: str | None, end_date: str | None, **periods):
    """Show the ledger of an account with running balances.

    ACCOUNT can be an account name or ID. Lines are listed newest first.

    Examples:
        ledgerbook ledger "Cash in Hand"
        ledgerbook ledger "Bank Account" --start-date 2024-02-01 --end-date 2024-02-29
        ledgerbook ledger 2 --last-month
    """
    book_id = resolve_book_or_exit(ctx)
    account_id = resolve_account_or_exit(ctx, book_id, account)
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period_flags=periods)

    try:
        window = ReportService(ctx.obj["db"]).account_ledger(book_id, account_id, start=start, end=end)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    side = "debit" if window.debit_normal else "credit"
    click.echo(f"\nLedger for account {account_id} ({side}-normal)")
    click.echo("-" * 100)
    click.echo(f"{'Date':<12} {'Txn':<6} {'Description':<36} {'Debit':>12} {'Credit':>12} {'Balance':>16}")
    click.echo("-" * 100)
    for line in window.entries:
        click.echo(
            f"{line.date.date().isoformat():<12} {line.transaction_id:<6} {line.description[:36]:<36} "
            f"{format_amount(line.debit or None):>12} {format_amount(line.credit or None):>12} "
            f"{format_balance(line.balance, window.debit_normal):>16}"
        )
    if not window.entries:
        click.echo("No entries in this period.")
    click.echo("-" * 100)
    if start is not None:
        click.echo(f"Opening balance: {format_balance(window.opening_balance, window.debit_normal)}")
    click.echo(f"Closing balance: {format_balance(window.closing_balance, window.debit_normal)}")


def register_commands(cli: click.Group) -> None:
    """Register ledger command with main CLI."""
    cli.add_command(ledger)
