"""Controller between raw user input and the :class:`~expense_tracker.ledger.Ledger`.

The ledger raises ``ValueError`` on invalid arguments. The controller is the
layer that checks user input first and turns rejections into ``False``
return values plus a WARNING log record, so interactive front-ends never see
exceptions for ordinary validation failures.
"""

from __future__ import annotations

from collections.abc import Iterable

from .ledger import Ledger, LedgerListener
from .logging_setup import get_logger
from .models import Transaction, validate_amount, validate_category

_logger = get_logger("expense_tracker.controller")


class ExpenseTrackerController:
    """Validated add / remove / mark operations over one ledger."""

    def __init__(self, model: Ledger, view: LedgerListener | None = None) -> None:
        self.model = model
        self.view = view
        if view is not None:
            model.register(view)
        self.last_error: str | None = None

    def _reject(self, reason: str) -> bool:
        self.last_error = reason
        _logger.warning("input rejected: %s", reason)
        return False

    def add_transaction(self, amount: float | str, category: str) -> bool:
        """Create a transaction from raw input and append it to the model.

        Returns ``False`` (leaving the model untouched) when either value
        fails validation.
        """

        self.last_error = None
        amount_check = validate_amount(amount)
        if not amount_check.ok:
            return self._reject(amount_check.reason or "invalid amount")
        category_check = validate_category(category)
        if not category_check.ok:
            return self._reject(category_check.reason or "invalid category")

        value = float(amount.strip()) if isinstance(amount, str) else float(amount)
        self.model.add_transaction(Transaction(amount=value, category=category))
        return True

    def remove_transaction(self, position: int) -> bool:
        """Remove the transaction currently shown at 0-based ``position``."""

        self.last_error = None
        transactions = self.model.get_transactions()
        if isinstance(position, bool) or not isinstance(position, int):
            return self._reject(f"row must be an integer, got {position!r}")
        if not 0 <= position < len(transactions):
            return self._reject(f"no transaction at row {position + 1}")
        self.model.remove_transaction(transactions[position])
        return True

    def mark(self, positions: Iterable[int] | None) -> bool:
        """Set the matched-filter indices to explicit 0-based ``positions``."""

        self.last_error = None
        if positions is None:
            return self._reject("rows to mark must be given")
        try:
            rows = list(positions)
        except TypeError:
            return self._reject(f"rows to mark must be a sequence, got {positions!r}")
        try:
            self.model.set_matched_filter_indices(rows)
        except ValueError as e:
            return self._reject(str(e))
        return True

    def clear_marks(self) -> bool:
        return self.mark([])


__all__ = ["ExpenseTrackerController"]
