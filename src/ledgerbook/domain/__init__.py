"""Domain layer for ledgerbook application.

Only the pure ledger engine is re-exported here; services are imported from
their own modules so the database layer can import entities without a cycle.
"""

from ledgerbook.domain.aggregation import (
    accounts_with_balances,
    balance_totals,
    categories_with_details,
    category_with_details,
    entry_turnover,
)
from ledgerbook.domain.ledger import (
    account_balance,
    category_balance,
    infer_normal_balance_side,
    is_debit_normal,
    sum_by_type,
)
from ledgerbook.domain.projection import project_ledger
from ledgerbook.domain.validation import validate_transaction

__all__ = [
    "account_balance",
    "accounts_with_balances",
    "balance_totals",
    "categories_with_details",
    "category_balance",
    "category_with_details",
    "entry_turnover",
    "infer_normal_balance_side",
    "is_debit_normal",
    "project_ledger",
    "sum_by_type",
    "validate_transaction",
]
