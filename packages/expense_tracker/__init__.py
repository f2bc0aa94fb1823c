"""Public interface for the ``expense_tracker`` package.

Symbol re-exports only; the ledger core lives in ``expense_tracker.ledger``.
"""

from .controller import ExpenseTrackerController
from .ledger import Ledger, LedgerListener
from .models import (
    ALLOWED_CATEGORIES,
    InputValidation,
    Transaction,
    Transactions,
    validate_amount,
    validate_category,
)
from .view import TransactionTableView, render_table

__all__ = [
    # Core
    "Ledger",
    "LedgerListener",
    # Entity / validation
    "ALLOWED_CATEGORIES",
    "InputValidation",
    "Transaction",
    "Transactions",
    "validate_amount",
    "validate_category",
    # Controller / view
    "ExpenseTrackerController",
    "TransactionTableView",
    "render_table",
]
