"""Utility functions for ledgerbook."""

from ledgerbook.utils.date_parser import parse_date
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.resolvers import resolve_by_name_or_id

__all__ = ["parse_date", "parse_amount", "resolve_by_name_or_id"]
