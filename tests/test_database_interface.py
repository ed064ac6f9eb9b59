"""Tests for Database interface returning domain models."""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal

from ledgerbook.database.models import utc_now
from ledgerbook.domain import entities
from ledgerbook.domain.entities import EntryType, NormalBalanceSide, TransactionDraft
from ledgerbook.domain.errors import NotFoundError, ReferentialIntegrityError

from conftest import credit, debit


@pytest.fixture
def chart(temp_db):
    """A book with one category and two accounts, created directly in the database."""
    book_id = temp_db.get_default_book().id
    category_id = temp_db.create_category(book_id, "Cash", NormalBalanceSide.DEBIT)
    till = temp_db.create_account(book_id, category_id, "Till")
    safe = temp_db.create_account(book_id, category_id, "Safe", opening_balance=Decimal("12.50"))
    return book_id, category_id, till, safe


def draft(description, when, entries):
    return TransactionDraft(description=description, date=when, entries=tuple(entries))


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_book_returns_domain_model(self, temp_db):
        book = temp_db.get_default_book()

        assert isinstance(book, entities.Book)
        assert isinstance(book.created_at, datetime)

    def test_get_category_returns_domain_model(self, temp_db, chart):
        book_id, category_id, _, _ = chart
        category = temp_db.get_category(book_id, category_id)

        assert isinstance(category, entities.Category)
        assert category.normal_balance_side == NormalBalanceSide.DEBIT

    def test_get_account_returns_domain_model(self, temp_db, chart):
        book_id, _, _, safe = chart
        account = temp_db.get_account(book_id, safe)

        assert isinstance(account, entities.Account)
        assert account.type is None
        assert account.opening_balance == Decimal("12.50")

    def test_get_account_scoped_to_book(self, temp_db, chart):
        _, _, till, _ = chart
        other_book = temp_db.create_book("Other")

        assert temp_db.get_account(other_book, till) is None

    def test_transaction_round_trip(self, temp_db, chart):
        book_id, _, till, safe = chart
        txn_id = temp_db.create_transaction(
            book_id, draft("Move", datetime(2024, 1, 1, 10), [debit(safe, "5", "to safe"), credit(till, "5")])
        )

        txn = temp_db.get_transaction(book_id, txn_id)
        assert isinstance(txn, entities.Transaction)
        assert isinstance(txn.entries[0], entities.TransactionEntry)
        assert txn.entries[0].type == EntryType.DEBIT
        assert txn.entries[0].description == "to safe"
        assert txn.entries[1].account_id == till

    def test_list_transactions_filters(self, temp_db, chart):
        book_id, _, till, safe = chart
        temp_db.create_transaction(book_id, draft("Early", datetime(2024, 1, 1), [debit(safe, "1"), credit(till, "1")]))
        temp_db.create_transaction(book_id, draft("Late", datetime(2024, 2, 1), [debit(safe, "1"), credit(till, "1")]))

        assert [t.description for t in temp_db.list_transactions(book_id)] == ["Late", "Early"]
        assert [t.description for t in temp_db.list_transactions(book_id, start=datetime(2024, 1, 15))] == ["Late"]
        assert [t.description for t in temp_db.list_transactions(book_id, end=datetime(2024, 1, 15))] == ["Early"]

    def test_count_account_entries(self, temp_db, chart):
        book_id, _, till, safe = chart
        temp_db.create_transaction(book_id, draft("Move", datetime(2024, 1, 1), [debit(safe, "1"), credit(till, "1")]))

        assert temp_db.count_account_entries(till) == 1
        with pytest.raises(ReferentialIntegrityError):
            temp_db.delete_accounts(book_id, [till])

    def test_count_category_accounts(self, temp_db, chart):
        book_id, category_id, _, _ = chart

        assert temp_db.count_category_accounts(category_id) == 2
        with pytest.raises(ReferentialIntegrityError):
            temp_db.delete_category(book_id, category_id)

    def test_deleted_ids_are_not_reused(self, temp_db, chart):
        """Restoring relies on ids never being handed out twice."""
        book_id, category_id, _, safe = chart
        temp_db.delete_accounts(book_id, [safe])
        new_id = temp_db.create_account(book_id, category_id, "Vault")

        assert new_id > safe

    def test_recycled_item_returns_domain_model(self, temp_db, chart):
        book_id, _, _, safe = chart
        item = temp_db.delete_accounts(book_id, [safe])[0]

        fetched = temp_db.get_recycled_item(item.id)
        assert isinstance(fetched, entities.RecycledItem)
        assert fetched.kind == entities.RecycledKind.ACCOUNT
        assert fetched.payload["opening_balance"] == "12.50"

    def test_list_recycled_items_since(self, temp_db, chart):
        book_id, _, _, safe = chart
        temp_db.delete_accounts(book_id, [safe])

        assert len(temp_db.list_recycled_items(book_id=book_id)) == 1
        assert temp_db.list_recycled_items(since=utc_now() + timedelta(minutes=1)) == []

    def test_restore_missing_item(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.restore_recycled_item(42)
