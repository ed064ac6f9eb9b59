"""Report domain service: ledgers, chart of accounts and dashboard rollups."""

from datetime import date, datetime
from typing import Union

from ledgerbook.database.base import Database
from ledgerbook.domain.aggregation import (
    accounts_with_balances,
    balance_totals,
    categories_with_details,
    entry_turnover,
    nonzero_balances,
)
from ledgerbook.domain.entities import (
    AccountWithBalance,
    CategoryWithDetails,
    DashboardSummary,
    LedgerWindow,
)
from ledgerbook.domain.errors import NotFoundError, account_not_found
from ledgerbook.domain.ledger import is_debit_normal
from ledgerbook.domain.projection import project_ledger


class ReportService:
    """Service turning stored book data into read-only view models."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def account_ledger(
        self,
        book_id: int,
        account_id: int,
        start: Union[date, datetime, None] = None,
        end: Union[date, datetime, None] = None,
    ) -> LedgerWindow:
        """Ledger of one account over an optional window.

        Args:
            book_id: Owning book
            account_id: Account to project
            start: Optional window start; earlier entries form the opening balance
            end: Optional inclusive window end

        Raises:
            NotFoundError: If the account doesn't exist in the book
        """
        account = self.db.get_account(book_id, account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        category = self.db.get_category(book_id, account.category_id)
        transactions = self.db.list_transactions(book_id, account_id=account_id)
        return project_ledger(
            account,
            transactions,
            debit_normal=is_debit_normal(account, category),
            start=start,
            end=end,
        )

    def account_balances(self, book_id: int) -> list[AccountWithBalance]:
        """All accounts of a book with all-time balances."""
        return accounts_with_balances(
            self.db.list_accounts(book_id),
            self.db.list_transactions(book_id),
            self.db.list_categories(book_id),
        )

    def chart_of_accounts(self, book_id: int) -> list[CategoryWithDetails]:
        """Categories with member account balances and totals."""
        return categories_with_details(
            self.db.list_categories(book_id),
            self.db.list_accounts(book_id),
            self.db.list_transactions(book_id),
        )

    def dashboard(self, book_id: int, include_zero: bool = False) -> DashboardSummary:
        """Book-wide totals, turnover and category rollups.

        Args:
            book_id: Book to summarize
            include_zero: Keep accounts with a zero balance in the account list
        """
        categories = self.db.list_categories(book_id)
        accounts = self.db.list_accounts(book_id)
        transactions = self.db.list_transactions(book_id)

        balances = accounts_with_balances(accounts, transactions, categories)
        return DashboardSummary(
            book_id=book_id,
            totals=balance_totals(balances),
            turnover=entry_turnover(transactions),
            categories=tuple(categories_with_details(categories, accounts, transactions)),
            accounts=tuple(balances if include_zero else nonzero_balances(balances)),
        )
