"""Summary command for book-wide balances."""

import click
from ledgerbook.cli.formatting import format_amount, format_balance
from ledgerbook.cli.resolution import resolve_book_or_exit
from ledgerbook.domain.report import ReportService


@click.command("summary")
@click.option("--include-zero", is_flag=True, help="Also list accounts with a zero balance")
@click.option("--by-category", is_flag=True, help="Group account balances under their categories")
@click.pass_context
def summary(ctx, include_zero: bool, by_category: bool):
    """Show balance totals and account balances for the book.

    Total debit and total credit are the sums of positive and (absolute)
    negative net account balances. Turnover sums every debit and every
    credit entry ever recorded.

    Examples:
        ledgerbook summary
        ledgerbook summary --by-category
    """
    book_id = resolve_book_or_exit(ctx)
    dashboard = ReportService(ctx.obj["db"]).dashboard(book_id, include_zero=include_zero)

    click.echo("\nBalance Summary")
    click.echo("=" * 70)
    if by_category:
        for detail in dashboard.categories:
            click.echo(f"\n{detail.category.name}: {format_balance(detail.total_balance, detail.debit_normal)}")
            for item in detail.accounts:
                if include_zero or item.balance != 0:
                    click.echo(f"  {item.name:40s} {format_balance(item.balance, detail.debit_normal):>20s}")
    else:
        for item in dashboard.accounts:
            click.echo(f"  {item.name:40s} {format_balance(item.balance, item.debit_normal):>20s}")
        if not dashboard.accounts:
            click.echo("No account balances.")

    click.echo("=" * 70)
    click.echo(f"{'Total debit':<42} {format_amount(dashboard.totals.debit):>20s}")
    click.echo(f"{'Total credit':<42} {format_amount(dashboard.totals.credit):>20s}")
    click.echo(f"{'Debit turnover':<42} {format_amount(dashboard.turnover.debit):>20s}")
    click.echo(f"{'Credit turnover':<42} {format_amount(dashboard.turnover.credit):>20s}")


def register_commands(cli: click.Group) -> None:
    """Register summary command with main CLI."""
    cli.add_command(summary)
