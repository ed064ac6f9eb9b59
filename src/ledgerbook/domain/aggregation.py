"""Chart aggregation: account and category rollups for dashboards.

Book-wide debit/credit totals follow one rule only, implemented by
``balance_totals``: net account balances split by sign. Raw posted amounts
are reported separately as turnover by ``entry_turnover``.
"""

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ledgerbook.domain.entities import (
    Account,
    AccountWithBalance,
    BalanceTotals,
    Category,
    CategoryWithDetails,
    EntryType,
    NormalBalanceSide,
    Transaction,
)
from ledgerbook.domain.ledger import (
    ZERO,
    account_balance,
    category_normal_balance_side,
    is_debit_normal,
    sum_by_type,
    transaction_entries,
)


def accounts_with_balances(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    categories: Optional[Iterable[Category]] = None,
) -> list[AccountWithBalance]:
    """Attach all-time balances to every account.

    When categories are given, accounts without an explicit type take their
    category's normal side.
    """
    entries = transaction_entries(transactions)
    category_index = {cat.id: cat for cat in categories or ()}

    result = []
    for account in accounts:
        debit_normal = is_debit_normal(account, category_index.get(account.category_id))
        result.append(
            AccountWithBalance(
                account=account,
                balance=account_balance(entries, account, debit_normal),
                debit_normal=debit_normal,
            )
        )
    return result


def balance_totals(balances: Iterable[AccountWithBalance]) -> BalanceTotals:
    """Split net balances by sign.

    Non-negative balances count toward debit; negative balances count toward
    credit by absolute value.
    """
    debit = ZERO
    credit = ZERO
    for item in balances:
        if item.balance >= 0:
            debit += item.balance
        else:
            credit += -item.balance
    return BalanceTotals(debit=debit, credit=credit)


def entry_turnover(transactions: Iterable[Transaction]) -> BalanceTotals:
    """Raw posted debit and credit amounts across all transactions."""
    entries = transaction_entries(transactions)
    return BalanceTotals(
        debit=sum_by_type(entries, EntryType.DEBIT),
        credit=sum_by_type(entries, EntryType.CREDIT),
    )


def category_with_details(
    category: Category,
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
) -> CategoryWithDetails:
    """Category with member account balances, all on the category's side."""
    entries = transaction_entries(transactions)
    debit_normal = category_normal_balance_side(category) == NormalBalanceSide.DEBIT

    members = tuple(
        AccountWithBalance(
            account=acc,
            balance=account_balance(entries, acc, debit_normal),
            debit_normal=debit_normal,
        )
        for acc in accounts
        if acc.category_id == category.id
    )
    return CategoryWithDetails(
        category=category,
        accounts=members,
        total_balance=sum((m.balance for m in members), ZERO),
        debit_normal=debit_normal,
    )


def categories_with_details(
    categories: Iterable[Category],
    accounts: Sequence[Account],
    transactions: Sequence[Transaction],
) -> list[CategoryWithDetails]:
    """Details for every category, in input order."""
    return [category_with_details(cat, accounts, transactions) for cat in categories]


def nonzero_balances(balances: Iterable[AccountWithBalance]) -> list[AccountWithBalance]:
    """Drop accounts whose balance is exactly zero."""
    return [item for item in balances if item.balance != Decimal("0")]
