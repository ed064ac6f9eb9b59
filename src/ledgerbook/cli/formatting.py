"""Display helpers shared by CLI commands."""

from decimal import Decimal


def format_amount(amount: Decimal | None) -> str:
    """Format an amount with thousands separators, blank for None."""
    if amount is None:
        return ""
    return f"{amount:,.2f}"


def format_balance(balance: Decimal, debit_normal: bool) -> str:
    """Format a net balance as an absolute amount with its Dr/Cr side."""
    if debit_normal:
        side = "Dr" if balance >= 0 else "Cr"
    else:
        side = "Cr" if balance >= 0 else "Dr"
    return f"{abs(balance):,.2f} {side}"
