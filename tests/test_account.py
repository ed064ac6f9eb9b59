"""Tests for account service."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerbook.domain.entities import AccountType, RecycledKind
from ledgerbook.domain.errors import (
    DuplicateNameError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)

from conftest import credit, debit


def test_create_account(account_service, sample_chart):
    book_id = sample_chart["book_id"]
    account_id = account_service.create_account(
        book_id,
        sample_chart["categories"]["Cash"],
        "Petty Cash",
        account_type="asset",
        opening_balance=Decimal("25.00"),
    )

    account = account_service.get_account(book_id, account_id)
    assert account.name == "Petty Cash"
    assert account.type == AccountType.ASSET
    assert account.opening_balance == Decimal("25.00")
    assert account.category_id == sample_chart["categories"]["Cash"]


def test_create_account_unknown_category(account_service, default_book_id):
    with pytest.raises(NotFoundError):
        account_service.create_account(default_book_id, 999, "Nowhere")


def test_create_account_category_from_other_book(account_service, category_service, book_service, default_book_id):
    other_book = book_service.create_book("Other Book")
    foreign_category = category_service.create_category(other_book, "Cash")

    with pytest.raises(NotFoundError):
        account_service.create_account(default_book_id, foreign_category, "Mixed")


def test_create_account_duplicate_name(account_service, sample_chart):
    with pytest.raises(DuplicateNameError):
        account_service.create_account(sample_chart["book_id"], sample_chart["categories"]["Revenue"], "cash in hand")


def test_create_account_invalid_type(account_service, sample_chart):
    with pytest.raises(ValidationError) as excinfo:
        account_service.create_account(
            sample_chart["book_id"], sample_chart["categories"]["Cash"], "Weird", account_type="gizmo"
        )
    assert excinfo.value.rule == "account_type"


def test_list_accounts_by_category(account_service, sample_chart):
    accounts = account_service.list_accounts(sample_chart["book_id"], category_id=sample_chart["categories"]["Expenses"])
    assert [a.name for a in accounts] == ["Office Rent", "Office Supplies"]


def test_update_account(account_service, sample_chart):
    book_id = sample_chart["book_id"]
    account_id = sample_chart["accounts"]["Supplier A"]

    account_service.update_account(
        book_id,
        account_id,
        name="Supplier Alpha",
        category_id=sample_chart["categories"]["Capital"],
        account_type=AccountType.LIABILITY,
    )

    account = account_service.get_account(book_id, account_id)
    assert account.name == "Supplier Alpha"
    assert account.category_id == sample_chart["categories"]["Capital"]
    assert account.type == AccountType.LIABILITY


def test_update_account_clear_type(account_service, sample_chart):
    book_id = sample_chart["book_id"]
    account_id = sample_chart["accounts"]["Bank Account"]
    account_service.update_account(book_id, account_id, account_type="asset")
    account_service.update_account(book_id, account_id, clear_type=True)

    assert account_service.get_account(book_id, account_id).type is None


def test_update_account_type_and_clear_conflict(account_service, sample_chart):
    with pytest.raises(ValidationError):
        account_service.update_account(
            sample_chart["book_id"], sample_chart["accounts"]["Bank Account"], account_type="asset", clear_type=True
        )


def test_update_account_name_taken(account_service, sample_chart):
    with pytest.raises(DuplicateNameError):
        account_service.update_account(sample_chart["book_id"], sample_chart["accounts"]["Bank Account"], name="Office Rent")


def test_delete_unused_account(account_service, sample_chart):
    book_id = sample_chart["book_id"]
    account_id = sample_chart["accounts"]["Office Supplies"]

    item = account_service.delete_account(book_id, account_id)

    assert item.kind == RecycledKind.ACCOUNT
    assert item.payload["name"] == "Office Supplies"
    assert account_service.get_account(book_id, account_id) is None


def test_delete_account_with_entries_blocked(account_service, transaction_service, sample_chart):
    book_id = sample_chart["book_id"]
    accounts = sample_chart["accounts"]
    transaction_service.create_transaction(
        book_id, "Sale", date(2024, 1, 1), [debit(accounts["Cash in Hand"], "10"), credit(accounts["Product Sales"], "10")]
    )

    with pytest.raises(ReferentialIntegrityError, match="1 transaction entry"):
        account_service.delete_account(book_id, accounts["Cash in Hand"])


def test_bulk_delete_is_all_or_nothing(account_service, transaction_service, sample_chart):
    """One blocked account keeps every account of the batch."""
    book_id = sample_chart["book_id"]
    accounts = sample_chart["accounts"]
    transaction_service.create_transaction(
        book_id, "Sale", date(2024, 1, 1), [debit(accounts["Cash in Hand"], "10"), credit(accounts["Product Sales"], "10")]
    )

    with pytest.raises(ReferentialIntegrityError):
        account_service.delete_accounts(book_id, [accounts["Office Rent"], accounts["Cash in Hand"]])

    assert account_service.get_account(book_id, accounts["Office Rent"]) is not None


def test_bulk_delete(account_service, sample_chart):
    book_id = sample_chart["book_id"]
    accounts = sample_chart["accounts"]
    ids = [accounts["Office Rent"], accounts["Office Supplies"], accounts["Office Rent"]]

    items = account_service.delete_accounts(book_id, ids)

    assert len(items) == 2
    assert len(account_service.list_accounts(book_id)) == len(accounts) - 2
