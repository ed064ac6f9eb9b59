"""Shared pytest fixtures for ledgerbook tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal

import pytest

from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.book import BookService
from ledgerbook.domain.category import CategoryService
from ledgerbook.domain.entities import EntryType, TransactionEntry
from ledgerbook.domain.recycle import RecycleBinService
from ledgerbook.domain.report import ReportService
from ledgerbook.domain.transaction import TransactionService

SAMPLE_CATEGORIES = ("Cash", "Capital", "Parties", "Revenue", "Expenses")

SAMPLE_ACCOUNTS = (
    ("Cash in Hand", "Cash"),
    ("Bank Account", "Cash"),
    ("Owner's Capital", "Capital"),
    ("Supplier A", "Parties"),
    ("Customer B", "Parties"),
    ("Product Sales", "Revenue"),
    ("Office Rent", "Expenses"),
    ("Office Supplies", "Expenses"),
)

# (date, description, debit account, credit account, amount)
SAMPLE_TRANSACTIONS = (
    (date(2024, 1, 1), "Owner investment", "Bank Account", "Owner's Capital", "10000"),
    (date(2024, 1, 5), "Cash withdrawal", "Cash in Hand", "Bank Account", "2000"),
    (date(2024, 1, 10), "Sale to Customer B", "Customer B", "Product Sales", "3000"),
    (date(2024, 1, 15), "Office rent", "Office Rent", "Bank Account", "1500"),
    (date(2024, 1, 20), "Supplies on credit", "Office Supplies", "Supplier A", "500"),
)


def debit(account_id: int, amount: str, description: str | None = None) -> TransactionEntry:
    """Build a debit entry."""
    return TransactionEntry(account_id=account_id, amount=Decimal(amount), type=EntryType.DEBIT, description=description)


def credit(account_id: int, amount: str, description: str | None = None) -> TransactionEntry:
    """Build a credit entry."""
    return TransactionEntry(account_id=account_id, amount=Decimal(amount), type=EntryType.CREDIT, description=description)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def book_service(temp_db):
    """Create a BookService with a temporary database."""
    return BookService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def recycle_service(temp_db):
    """Create a RecycleBinService with a temporary database."""
    return RecycleBinService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def default_book_id(book_service):
    """ID of the default book created by initialize_schema."""
    return book_service.get_default_book().id


@pytest.fixture
def sample_chart(default_book_id, category_service, account_service):
    """Create the sample categories and accounts in the default book.

    Returns:
        Dict with "categories" and "accounts" mapping names to IDs
    """
    categories = {
        name: category_service.create_category(default_book_id, name) for name in SAMPLE_CATEGORIES
    }
    accounts = {
        name: account_service.create_account(default_book_id, categories[category], name)
        for name, category in SAMPLE_ACCOUNTS
    }
    return {"book_id": default_book_id, "categories": categories, "accounts": accounts}


@pytest.fixture
def sample_book(sample_chart, transaction_service):
    """Sample chart plus five posted transactions.

    Returns:
        The sample_chart dict with an extra "transactions" list of IDs
    """
    accounts = sample_chart["accounts"]
    transaction_ids = []
    for txn_date, description, debit_name, credit_name, amount in SAMPLE_TRANSACTIONS:
        transaction_ids.append(
            transaction_service.create_transaction(
                sample_chart["book_id"],
                description,
                txn_date,
                [debit(accounts[debit_name], amount), credit(accounts[credit_name], amount)],
            )
        )
    return {**sample_chart, "transactions": transaction_ids}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
