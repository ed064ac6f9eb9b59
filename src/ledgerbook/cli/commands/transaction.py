"""Transaction management commands."""

from datetime import datetime

import click
from ledgerbook.cli.date_filters import period_options, resolve_cli_date_range
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.cli.formatting import format_amount
from ledgerbook.cli.resolution import resolve_account_or_exit, resolve_book_or_exit
from ledgerbook.database.models import utc_now
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import EntryType, Highlight, TransactionEntry
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.ledger import sum_by_type
from ledgerbook.domain.transaction import TransactionService
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import parse_datetime

ENTRY_HELP = "ACCOUNT=AMOUNT[;NOTE], may be repeated"


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


def _parse_entry(ctx, book_id: int, raw: str, entry_type: EntryType) -> TransactionEntry:
    """Parse one "ACCOUNT=AMOUNT[;NOTE]" option value."""
    posting, _, note = raw.partition(";")
    account, sep, amount = posting.rpartition("=")
    if not sep or not account.strip():
        click.echo(f"Error: Invalid entry '{raw}', expected ACCOUNT=AMOUNT[;NOTE]", err=True)
        ctx.exit(1)

    account_id = resolve_account_or_exit(ctx, book_id, account.strip())
    try:
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    return TransactionEntry(
        account_id=account_id,
        amount=value,
        type=entry_type,
        description=note.strip() or None,
    )


def _parse_entries(ctx, book_id: int, debits, credits) -> list[TransactionEntry]:
    entries = [_parse_entry(ctx, book_id, raw, EntryType.DEBIT) for raw in debits]
    entries.extend(_parse_entry(ctx, book_id, raw, EntryType.CREDIT) for raw in credits)
    return entries


def _parse_when(ctx, value: str | None) -> datetime:
    if value is None:
        return utc_now()
    try:
        return parse_datetime(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


@transaction_group.command("add")
@click.option("--description", "-m", required=True, help="Transaction description")
@click.option("--date", help="Transaction date (YYYY-MM-DD, ISO timestamp or relative like 'today')")
@click.option("--debit", "debits", multiple=True, help=f"Debit entry: {ENTRY_HELP}")
@click.option("--credit", "credits", multiple=True, help=f"Credit entry: {ENTRY_HELP}")
@click.pass_context
def add_transaction(ctx, description: str, date: str | None, debits, credits) -> None:
    """Record a balanced transaction.

    Total debits must equal total credits.

    Examples:
        ledgerbook transaction add -m "Owner investment" --date 2024-01-01 \\
            --debit "Bank Account=10000" --credit "Owner's Capital=10000"
        ledgerbook transaction add -m "Split sale" --debit "Cash in Hand=60" \\
            --debit "Bank Account=40" --credit "Product Sales=100;invoice 17"
    """
    book_id = resolve_book_or_exit(ctx)
    entries = _parse_entries(ctx, book_id, debits, credits)
    when = _parse_when(ctx, date)

    try:
        txn_id = TransactionService(ctx.obj["db"]).create_transaction(book_id, description, when, entries)
        click.echo(f"Created transaction {txn_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--description", "-m", help="New description")
@click.option("--date", help="New date")
@click.option("--debit", "debits", multiple=True, help=f"Debit entry: {ENTRY_HELP}")
@click.option("--credit", "credits", multiple=True, help=f"Credit entry: {ENTRY_HELP}")
@click.pass_context
def update_transaction(ctx, transaction_id: int, description: str | None, date: str | None, debits, credits) -> None:
    """Update a transaction.

    Omitted fields keep their current values. When any --debit or --credit
    is given, the full set of entries is replaced and must balance again.

    Examples:
        ledgerbook transaction update 3 -m "Office rent for March"
        ledgerbook transaction update 3 --debit "Office Rent=1200" --credit "Bank Account=1200"
    """
    book_id = resolve_book_or_exit(ctx)
    service = TransactionService(ctx.obj["db"])

    try:
        existing = service.require_transaction(book_id, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    entries = existing.entries
    if debits or credits:
        entries = _parse_entries(ctx, book_id, debits, credits)
    when = existing.date if date is None else _parse_when(ctx, date)

    try:
        service.update_transaction(
            book_id,
            transaction_id,
            description if description is not None else existing.description,
            when,
            entries,
        )
        click.echo(f"Updated transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@click.option("--account", help="Only transactions touching this account (name or ID)")
@period_options
@click.option("--verbose", "-v", is_flag=True, help="Show every entry of each transaction")
@click.pass_context
def list_transactions(ctx, start_date: str | None, end_date: str | None, account: str | None, verbose: bool, **periods):
    """View transactions, newest first."""
    book_id = resolve_book_or_exit(ctx)
    db = ctx.obj["db"]
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period_flags=periods)

    account_id = None
    if account:
        account_id = resolve_account_or_exit(ctx, book_id, account)

    service = TransactionService(db)
    transactions = service.list_transactions(book_id, start=start, end=end, account_id=account_id)
    if not transactions:
        click.echo("No transactions found.")
        return

    highlights = service.get_highlights(book_id)
    accounts = {acc.id: acc.name for acc in AccountService(db).list_accounts(book_id)}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Date':<12} {'Amount':>14}  {'Mark':<7} {'Description':<50}")
    click.echo("-" * 100)
    for txn in transactions:
        amount = format_amount(sum_by_type(txn.entries, EntryType.DEBIT))
        mark = highlights[txn.id].value if txn.id in highlights else ""
        click.echo(f"{txn.id:<6} {txn.date.date().isoformat():<12} {amount:>14}  {mark:<7} {txn.description[:50]:<50}")
        if verbose:
            for entry in txn.entries:
                side = "Dr" if entry.type == EntryType.DEBIT else "Cr"
                note = f"  ({entry.description})" if entry.description else ""
                name = accounts.get(entry.account_id, "Unknown")
                click.echo(f"{'':<6} {side:<3} {name:<30} {format_amount(entry.amount):>14}{note}")


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int) -> None:
    """Show a transaction with all its entries."""
    book_id = resolve_book_or_exit(ctx)
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        txn = service.require_transaction(book_id, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    accounts = {acc.id: acc.name for acc in AccountService(db).list_accounts(book_id)}
    highlight = service.get_highlights(book_id).get(txn.id)

    click.echo(f"Transaction ID: {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Description: {txn.description}")
    if highlight is not None:
        click.echo(f"  Highlight: {highlight.value}")
    click.echo(f"  {'Account':<30} {'Debit':>14} {'Credit':>14}")
    for entry in txn.entries:
        debit = entry.amount if entry.type == EntryType.DEBIT else None
        credit = entry.amount if entry.type == EntryType.CREDIT else None
        note = f"  ({entry.description})" if entry.description else ""
        click.echo(
            f"  {accounts.get(entry.account_id, 'Unknown'):<30} "
            f"{format_amount(debit):>14} {format_amount(credit):>14}{note}"
        )


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction.

    The transaction is moved to the recycle bin.

    Examples:
        ledgerbook transaction delete 1
    """
    book_id = resolve_book_or_exit(ctx)
    service = TransactionService(ctx.obj["db"])

    if service.get_transaction(book_id, transaction_id) is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        item = service.delete_transaction(book_id, transaction_id)
        click.echo(f"Deleted transaction {transaction_id} (recycle bin item {item.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("highlight")
@click.argument("transaction_id", type=int)
@click.argument("color", type=click.Choice([h.value for h in Highlight] + ["none"], case_sensitive=False))
@click.pass_context
def highlight_transaction(ctx, transaction_id: int, color: str) -> None:
    """Set or clear (with "none") a transaction highlight."""
    book_id = resolve_book_or_exit(ctx)
    value = None if color.lower() == "none" else color

    try:
        TransactionService(ctx.obj["db"]).set_highlight(book_id, transaction_id, value)
        if value is None:
            click.echo(f"Cleared highlight on transaction {transaction_id}")
        else:
            click.echo(f"Highlighted transaction {transaction_id} {value.lower()}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
