"""Tests for recycle bin service."""

import pytest
from datetime import date, timedelta

from ledgerbook.database.models import utc_now
from ledgerbook.domain.entities import Highlight, RecycledKind
from ledgerbook.domain.errors import DuplicateNameError, NotFoundError

from conftest import credit, debit


def test_restore_transaction_keeps_id_and_highlight(transaction_service, recycle_service, sample_book):
    book_id = sample_book["book_id"]
    txn_id = sample_book["transactions"][2]
    transaction_service.set_highlight(book_id, txn_id, "blue")
    original = transaction_service.get_transaction(book_id, txn_id)

    item = transaction_service.delete_transaction(book_id, txn_id)
    restored_id = recycle_service.restore(item.id)

    assert restored_id == txn_id
    restored = transaction_service.get_transaction(book_id, txn_id)
    assert restored.description == original.description
    assert restored.date == original.date
    assert restored.entries == original.entries
    assert transaction_service.get_highlights(book_id) == {txn_id: Highlight.BLUE}
    assert recycle_service.list_items(book_id=book_id) == []


def test_restore_transaction_needs_its_accounts(transaction_service, account_service, recycle_service, sample_chart):
    book_id = sample_chart["book_id"]
    accounts = sample_chart["accounts"]
    txn_id = transaction_service.create_transaction(
        book_id, "Rent", date(2024, 1, 1), [debit(accounts["Office Rent"], "10"), credit(accounts["Bank Account"], "10")]
    )
    item = transaction_service.delete_transaction(book_id, txn_id)
    account_service.delete_account(book_id, accounts["Office Rent"])

    with pytest.raises(NotFoundError):
        recycle_service.restore(item.id)


def test_restore_account(account_service, recycle_service, sample_chart):
    book_id = sample_chart["book_id"]
    account_id = sample_chart["accounts"]["Office Supplies"]
    item = account_service.delete_account(book_id, account_id)

    assert recycle_service.restore(item.id) == account_id
    assert account_service.get_account(book_id, account_id).name == "Office Supplies"


def test_restore_account_name_taken(account_service, recycle_service, sample_chart):
    book_id = sample_chart["book_id"]
    item = account_service.delete_account(book_id, sample_chart["accounts"]["Office Supplies"])
    account_service.create_account(book_id, sample_chart["categories"]["Expenses"], "office supplies")

    with pytest.raises(DuplicateNameError):
        recycle_service.restore(item.id)
    assert recycle_service.get_item(item.id) == item


def test_restore_account_needs_category(account_service, category_service, recycle_service, sample_chart):
    book_id = sample_chart["book_id"]
    expenses = sample_chart["categories"]["Expenses"]
    items = account_service.delete_accounts(
        book_id, [sample_chart["accounts"]["Office Rent"], sample_chart["accounts"]["Office Supplies"]]
    )
    category_service.delete_category(book_id, expenses)

    with pytest.raises(NotFoundError):
        recycle_service.restore(items[0].id)


def test_restore_category(category_service, recycle_service, default_book_id):
    category_id = category_service.create_category(default_book_id, "Temporary", "debit")
    item = category_service.delete_category(default_book_id, category_id)

    recycle_service.restore(item.id)

    category = category_service.get_category(default_book_id, category_id)
    assert category.name == "Temporary"
    assert category.normal_balance_side.value == "debit"


def test_restore_book_with_contents(book_service, category_service, report_service, recycle_service):
    """A restored book comes back with its chart and transactions."""
    book_id = book_service.create_book("Second")
    category_service.create_category(book_id, "Cash")
    item = book_service.delete_book(book_id)

    assert recycle_service.restore(item.id) == book_id
    assert book_service.get_book(book_id).name == "Second"
    assert len(report_service.chart_of_accounts(book_id)) == 1


def test_restore_unknown_item(recycle_service):
    with pytest.raises(NotFoundError):
        recycle_service.restore(999)


def test_list_items_newest_first(account_service, recycle_service, sample_chart):
    book_id = sample_chart["book_id"]
    first = account_service.delete_account(book_id, sample_chart["accounts"]["Office Rent"])
    second = account_service.delete_account(book_id, sample_chart["accounts"]["Office Supplies"])

    items = recycle_service.list_items(book_id=book_id)
    assert [i.id for i in items] == [second.id, first.id]
    assert {i.kind for i in items} == {RecycledKind.ACCOUNT}


def test_list_items_respects_retention_window(account_service, recycle_service, sample_chart):
    book_id = sample_chart["book_id"]
    account_service.delete_account(book_id, sample_chart["accounts"]["Office Rent"])

    later = utc_now() + timedelta(days=31)
    assert recycle_service.list_items(book_id=book_id, now=later) == []
    assert len(recycle_service.list_items(book_id=book_id, within_days=None)) == 1


def test_purge_expired(account_service, recycle_service, sample_chart):
    book_id = sample_chart["book_id"]
    account_service.delete_account(book_id, sample_chart["accounts"]["Office Rent"])

    assert recycle_service.purge_expired() == 0
    assert recycle_service.purge_expired(now=utc_now() + timedelta(days=31)) == 1
    assert recycle_service.list_items(within_days=None) == []
