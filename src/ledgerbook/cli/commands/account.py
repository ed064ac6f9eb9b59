"""Account management commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.cli.formatting import format_amount, format_balance
from ledgerbook.cli.resolution import (
    resolve_account_or_exit,
    resolve_book_or_exit,
    resolve_category_or_exit,
)
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.category import CategoryService
from ledgerbook.domain.entities import AccountType
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.report import ReportService
from ledgerbook.utils.amount_parser import parse_amount

TYPE_CHOICE = click.Choice([t.value for t in AccountType], case_sensitive=False)


@click.group()
def account_group():
    """Manage accounts."""
    pass


def _parse_opening_balance(ctx, value: str | None):
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--type", "account_type", type=TYPE_CHOICE, help="Account type")
@click.option("--opening-balance", help="Opening balance (kept for reference)")
@click.pass_context
def create_account(ctx, name: str, category: str, account_type: str | None, opening_balance: str | None):
    """Create a new account in a category.

    Examples:
        ledgerbook account create "Cash in Hand" --category "Cash"
        ledgerbook account create "Bank Loan" --category "Loans" --type liability
    """
    book_id = resolve_book_or_exit(ctx)
    category_id = resolve_category_or_exit(ctx, book_id, category)
    opening = _parse_opening_balance(ctx, opening_balance)

    try:
        account_id = AccountService(ctx.obj["db"]).create_account(
            book_id, category_id, name, account_type=account_type, opening_balance=opening
        )
        click.echo(f"Created account '{name.strip()}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option("--category", help="Only accounts of this category (name or ID)")
@click.option("--balances", is_flag=True, help="Show all-time balances")
@click.pass_context
def list_accounts(ctx, category: str | None, balances: bool):
    """List accounts of the book."""
    book_id = resolve_book_or_exit(ctx)
    db = ctx.obj["db"]

    category_id = None
    if category is not None:
        category_id = resolve_category_or_exit(ctx, book_id, category)

    accounts = AccountService(db).list_accounts(book_id, category_id=category_id)
    if not accounts:
        click.echo("No accounts found.")
        return

    categories = {cat.id: cat.name for cat in CategoryService(db).list_categories(book_id)}
    balance_map = {}
    if balances:
        balance_map = {item.id: item for item in ReportService(db).account_balances(book_id)}

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        line = f"ID: {acc.id:3d} | {acc.name:25s} | {categories.get(acc.category_id, 'Unknown'):20s}"
        if acc.type is not None:
            line += f" | {acc.type.value}"
        if balances:
            item = balance_map[acc.id]
            line += f" | {format_balance(item.balance, item.debit_normal)}"
        click.echo(line)


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--category", help="New category name or ID")
@click.option("--type", "account_type", type=TYPE_CHOICE, help="New account type")
@click.option("--clear-type", is_flag=True, help="Remove the explicit account type")
@click.option("--opening-balance", help="New opening balance")
@click.pass_context
def update_account(
    ctx,
    account: str,
    name: str | None,
    category: str | None,
    account_type: str | None,
    clear_type: bool,
    opening_balance: str | None,
) -> None:
    """Update an account.

    ACCOUNT can be an account name or ID. Only given fields change.

    Examples:
        ledgerbook account update "Cash in Hand" --name "Petty Cash"
        ledgerbook account update 3 --type asset
    """
    book_id = resolve_book_or_exit(ctx)
    account_id = resolve_account_or_exit(ctx, book_id, account)
    category_id = None
    if category is not None:
        category_id = resolve_category_or_exit(ctx, book_id, category)
    opening = _parse_opening_balance(ctx, opening_balance)

    try:
        AccountService(ctx.obj["db"]).update_account(
            book_id,
            account_id,
            name=name,
            category_id=category_id,
            account_type=account_type,
            opening_balance=opening,
            clear_type=clear_type,
        )
        click.echo(f"Updated account {account_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str) -> None:
    """Show one account with its balance."""
    book_id = resolve_book_or_exit(ctx)
    account_id = resolve_account_or_exit(ctx, book_id, account)
    db = ctx.obj["db"]

    acc = AccountService(db).require_account(book_id, account_id)
    category = CategoryService(db).require_category(book_id, acc.category_id)
    item = next(i for i in ReportService(db).account_balances(book_id) if i.id == account_id)

    click.echo(f"Account ID: {acc.id}")
    click.echo(f"  Name: {acc.name}")
    click.echo(f"  Category: {category.name}")
    click.echo(f"  Type: {acc.type.value if acc.type else '-'}")
    if acc.opening_balance is not None:
        click.echo(f"  Opening balance: {format_amount(acc.opening_balance)}")
    click.echo(f"  Balance: {format_balance(item.balance, item.debit_normal)}")


@account_group.command("delete")
@click.argument("accounts", metavar="ACCOUNT...", nargs=-1, required=True)
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_accounts(ctx, accounts: tuple[str, ...], yes: bool) -> None:
    """Delete one or more accounts.

    Accounts referenced by any transaction entry cannot be deleted. When
    several accounts are given, either all of them are deleted or none is.

    Examples:
        ledgerbook account delete "Old Wallet"
        ledgerbook account delete 4 5 6 --yes
    """
    book_id = resolve_book_or_exit(ctx)
    account_ids = [resolve_account_or_exit(ctx, book_id, acc) for acc in accounts]

    if not yes and not click.confirm(f"Are you sure you want to delete {len(account_ids)} account(s)?"):
        click.echo("Deletion cancelled.")
        return

    try:
        items = AccountService(ctx.obj["db"]).delete_accounts(book_id, account_ids)
        click.echo(f"Deleted {len(items)} account(s)")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli: click.Group) -> None:
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
