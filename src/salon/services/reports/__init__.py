"""Reporting services."""

from .transactions import XLSX_MEDIA_TYPE, export_transactions_xlsx, get_transaction_history

__all__ = ["XLSX_MEDIA_TYPE", "export_transactions_xlsx", "get_transaction_history"]
