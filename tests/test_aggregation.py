"""Tests for chart aggregation."""

from datetime import datetime
from decimal import Decimal

from ledgerbook.domain.aggregation import (
    accounts_with_balances,
    balance_totals,
    categories_with_details,
    category_with_details,
    entry_turnover,
    nonzero_balances,
)
from ledgerbook.domain.entities import (
    Account,
    AccountType,
    Category,
    NormalBalanceSide,
    Transaction,
)

from conftest import credit, debit

CREATED = datetime(2024, 1, 1)

CASH_CATEGORY = Category(1, 1, "Cash", NormalBalanceSide.DEBIT, CREATED)
CAPITAL_CATEGORY = Category(2, 1, "Capital", NormalBalanceSide.CREDIT, CREATED)

BANK = Account(1, 1, 1, "Bank", None, None, CREATED)
WALLET = Account(2, 1, 1, "Wallet", None, None, CREATED)
OWNER = Account(3, 1, 2, "Owner", None, None, CREATED)


def transactions():
    return [
        Transaction(1, 1, datetime(2024, 1, 1), "Invest", (debit(1, "1000"), credit(3, "1000")), CREATED),
        Transaction(2, 1, datetime(2024, 1, 2), "Overdraw", (debit(2, "1200"), credit(1, "1200")), CREATED),
    ]


def test_accounts_with_balances_uses_category_side():
    balances = {item.name: item for item in accounts_with_balances([BANK, WALLET, OWNER], transactions(), [CASH_CATEGORY, CAPITAL_CATEGORY])}

    assert balances["Bank"].balance == Decimal("-200")
    assert balances["Bank"].debit_normal is True
    assert balances["Wallet"].balance == Decimal("1200")
    assert balances["Owner"].balance == Decimal("1000")
    assert balances["Owner"].debit_normal is False


def test_accounts_with_balances_without_categories():
    """Untyped accounts fall back to credit-normal."""
    balances = accounts_with_balances([BANK], transactions())
    assert balances[0].balance == Decimal("200")
    assert balances[0].debit_normal is False


def test_balance_totals_split_by_sign():
    balances = accounts_with_balances([BANK, WALLET, OWNER], transactions(), [CASH_CATEGORY, CAPITAL_CATEGORY])
    totals = balance_totals(balances)

    assert totals.debit == Decimal("2200")
    assert totals.credit == Decimal("200")


def test_balance_totals_empty():
    totals = balance_totals([])
    assert totals.debit == Decimal("0")
    assert totals.credit == Decimal("0")


def test_entry_turnover_sums_raw_amounts():
    turnover = entry_turnover(transactions())
    assert turnover.debit == Decimal("2200")
    assert turnover.credit == Decimal("2200")


def test_category_with_details():
    detail = category_with_details(CASH_CATEGORY, [BANK, WALLET, OWNER], transactions())

    assert [item.name for item in detail.accounts] == ["Bank", "Wallet"]
    assert detail.total_balance == Decimal("1000")
    assert detail.debit_normal is True


def test_category_side_applies_even_to_typed_members():
    """Category rollups sign every member by the category's side."""
    typed = Account(4, 1, 2, "Typed Asset", AccountType.ASSET, None, CREATED)
    txns = [Transaction(1, 1, CREATED, "x", (debit(4, "50"), credit(1, "50")), CREATED)]

    detail = category_with_details(CAPITAL_CATEGORY, [typed], txns)
    assert detail.accounts[0].balance == Decimal("-50")


def test_empty_category_totals_zero():
    empty = Category(9, 1, "Empty", NormalBalanceSide.CREDIT, CREATED)
    detail = category_with_details(empty, [BANK], transactions())

    assert detail.accounts == ()
    assert detail.total_balance == Decimal("0")


def test_categories_with_details_keeps_order():
    details = categories_with_details([CAPITAL_CATEGORY, CASH_CATEGORY], [BANK, WALLET, OWNER], transactions())
    assert [d.category.name for d in details] == ["Capital", "Cash"]


def test_nonzero_balances():
    balances = accounts_with_balances([BANK, WALLET, OWNER], [], [CASH_CATEGORY])
    assert nonzero_balances(balances) == []
