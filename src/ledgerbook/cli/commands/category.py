"""Category management commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.cli.formatting import format_balance
from ledgerbook.cli.resolution import resolve_book_or_exit, resolve_category_or_exit
from ledgerbook.domain.category import CategoryService
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.report import ReportService

SIDE_CHOICE = click.Choice(["debit", "credit"], case_sensitive=False)


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("create")
@click.argument("name", metavar="CATEGORY_NAME")
@click.option(
    "--side",
    type=SIDE_CHOICE,
    help="Normal balance side (defaults to a guess based on the name)",
)
@click.pass_context
def create_category(ctx, name: str, side: str | None):
    """Create a new category.

    When --side is omitted, names such as "Assets", "Expenses" or "Cash"
    become debit-normal and everything else credit-normal.

    Examples:
        ledgerbook category create "Cash"
        ledgerbook category create "Loans" --side credit
    """
    book_id = resolve_book_or_exit(ctx)
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = service.create_category(book_id, name, side)
        category = service.require_category(book_id, category_id)
        click.echo(
            f"Created category '{category.name}' (ID: {category_id}, "
            f"{category.normal_balance_side.value}-normal)"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("list")
@click.option("--balances", is_flag=True, help="Show member accounts and balances")
@click.pass_context
def list_categories(ctx, balances: bool):
    """List categories of the book."""
    book_id = resolve_book_or_exit(ctx)
    db = ctx.obj["db"]

    if not balances:
        categories = CategoryService(db).list_categories(book_id)
        if not categories:
            click.echo("No categories found.")
            return
        click.echo("\nCategories:")
        click.echo("-" * 60)
        for cat in categories:
            side = cat.normal_balance_side.value if cat.normal_balance_side else "auto"
            click.echo(f"ID: {cat.id:3d} | {cat.name:30s} | {side}")
        return

    details = ReportService(db).chart_of_accounts(book_id)
    if not details:
        click.echo("No categories found.")
        return
    for detail in details:
        click.echo(
            f"\n{detail.category.name} (ID: {detail.category.id}) "
            f"- Total: {format_balance(detail.total_balance, detail.debit_normal)}"
        )
        click.echo("-" * 60)
        for item in detail.accounts:
            click.echo(f"  {item.name:40s} {format_balance(item.balance, detail.debit_normal):>18s}")


@category_group.command("rename")
@click.argument("category", metavar="CATEGORY")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_category(ctx, category: str, new_name: str) -> None:
    """Rename a category.

    CATEGORY can be a category name or ID. The normal balance side is kept.
    """
    book_id = resolve_book_or_exit(ctx)
    category_id = resolve_category_or_exit(ctx, book_id, category)

    try:
        CategoryService(ctx.obj["db"]).rename_category(book_id, category_id, new_name)
        click.echo(f"Renamed category to '{new_name.strip()}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("set-side")
@click.argument("category", metavar="CATEGORY")
@click.argument("side", type=SIDE_CHOICE)
@click.pass_context
def set_side(ctx, category: str, side: str) -> None:
    """Set a category's normal balance side.

    Examples:
        ledgerbook category set-side "Parties" credit
    """
    book_id = resolve_book_or_exit(ctx)
    category_id = resolve_category_or_exit(ctx, book_id, category)

    try:
        CategoryService(ctx.obj["db"]).set_normal_balance_side(book_id, category_id, side)
        click.echo(f"Category {category_id} is now {side.lower()}-normal")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("delete")
@click.argument("category", metavar="CATEGORY")
@click.pass_context
def delete_category(ctx, category: str) -> None:
    """Delete a category.

    The category can only be deleted when no account belongs to it.
    """
    book_id = resolve_book_or_exit(ctx)
    category_id = resolve_category_or_exit(ctx, book_id, category)

    try:
        item = CategoryService(ctx.obj["db"]).delete_category(book_id, category_id)
        click.echo(f"Deleted category {category_id} (recycle bin item {item.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli: click.Group) -> None:
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
