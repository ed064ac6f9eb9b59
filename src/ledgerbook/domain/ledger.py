"""Double-entry ledger arithmetic.

Pure functions computing debit/credit totals, net balances and the
normal-balance sign convention for accounts and categories. A positive net
balance means the account sits on its normal side; a negative one means it
has flipped (e.g. an overdrawn bank account).
"""

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ledgerbook.config import DEBIT_NORMAL_CATEGORY_KEYWORDS
from ledgerbook.domain.entities import (
    Account,
    AccountType,
    Category,
    EntryType,
    NormalBalanceSide,
    Transaction,
    TransactionEntry,
)

ZERO = Decimal("0")

DEBIT_NORMAL_ACCOUNT_TYPES = frozenset({AccountType.ASSET, AccountType.EXPENSE})


def sum_by_type(entries: Iterable[TransactionEntry], entry_type: EntryType) -> Decimal:
    """Sum amounts of all entries on one side."""
    return sum((e.amount for e in entries if e.type == entry_type), ZERO)


def is_debit_normal_type(account_type: Optional[AccountType]) -> bool:
    """Return True for account types whose balance grows with debits."""
    return account_type in DEBIT_NORMAL_ACCOUNT_TYPES


def infer_normal_balance_side(category_name: str) -> NormalBalanceSide:
    """Infer a category's normal side from its name.

    Any name containing one of the debit keywords (case-insensitive) is
    debit-normal; everything else is credit-normal.
    """
    lowered = category_name.lower()
    if any(keyword in lowered for keyword in DEBIT_NORMAL_CATEGORY_KEYWORDS):
        return NormalBalanceSide.DEBIT
    return NormalBalanceSide.CREDIT


def category_normal_balance_side(category: Category) -> NormalBalanceSide:
    """Stored side of a category, or the name inference for legacy rows."""
    if category.normal_balance_side is not None:
        return category.normal_balance_side
    return infer_normal_balance_side(category.name)


def is_debit_normal(account: Account, category: Optional[Category] = None) -> bool:
    """Decide the normal side of an account.

    The explicit account type wins. Without a type the owning category's
    side is used; an account with neither is credit-normal.
    """
    if account.type is not None:
        return is_debit_normal_type(account.type)
    if category is not None:
        return category_normal_balance_side(category) == NormalBalanceSide.DEBIT
    return False


def signed_amount(entry: TransactionEntry, debit_normal: bool) -> Decimal:
    """Entry amount signed relative to the account's normal side."""
    on_debit = entry.type == EntryType.DEBIT
    return entry.amount if on_debit == debit_normal else -entry.amount


def net_balance(entries: Sequence[TransactionEntry], debit_normal: bool) -> Decimal:
    """Net of debits and credits expressed on the normal side."""
    debit_total = sum_by_type(entries, EntryType.DEBIT)
    credit_total = sum_by_type(entries, EntryType.CREDIT)
    if debit_normal:
        return debit_total - credit_total
    return credit_total - debit_total


def account_balance(
    entries: Iterable[TransactionEntry],
    account: Account,
    debit_normal: Optional[bool] = None,
) -> Decimal:
    """Net balance of one account over a set of entries.

    Args:
        entries: Entries from any number of accounts
        account: Account to compute the balance for
        debit_normal: Side override; defaults to the account's explicit type

    Returns:
        Signed balance on the account's normal side
    """
    if debit_normal is None:
        debit_normal = is_debit_normal_type(account.type)
    own_entries = [e for e in entries if e.account_id == account.id]
    return net_balance(own_entries, debit_normal)


def category_balance(
    entries: Iterable[TransactionEntry],
    category: Category,
    accounts_in_category: Iterable[Account],
) -> Decimal:
    """Sum of member account balances using the category's single side."""
    entries = list(entries)
    debit_normal = category_normal_balance_side(category) == NormalBalanceSide.DEBIT
    return sum(
        (account_balance(entries, acc, debit_normal) for acc in accounts_in_category),
        ZERO,
    )


def transaction_entries(transactions: Iterable[Transaction]) -> list[TransactionEntry]:
    """Flatten entries across transactions."""
    return [entry for txn in transactions for entry in txn.entries]
