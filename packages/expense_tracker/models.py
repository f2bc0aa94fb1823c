"""Transaction entity and input validation for ``expense_tracker``.

The ledger treats transactions as opaque references. This module is where
their fields and the rules for accepting user input live, so that the
controller and the terminal prompts share one definition.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import TypeAlias

# ---------------------------------------------------------------------------
# Allowed values
# ---------------------------------------------------------------------------

ALLOWED_CATEGORIES: tuple[str, ...] = (
    "food",
    "travel",
    "bills",
    "entertainment",
    "other",
)

# Exclusive bounds for a single transaction amount.
MIN_AMOUNT: float = 0.0
MAX_AMOUNT: float = 1000.0

TIMESTAMP_FORMAT = "%d-%m-%Y %H:%M"


def current_timestamp() -> str:
    """Return the current local time formatted with ``TIMESTAMP_FORMAT``."""

    return datetime.now().strftime(TIMESTAMP_FORMAT)


# ---------------------------------------------------------------------------
# Non-raising validation helpers (shared with the terminal UI)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class InputValidation:
    ok: bool
    reason: str | None = None


def validate_amount(value: object) -> InputValidation:
    """Check that ``value`` is a number (or numeric string) in (0, 1000).

    Booleans are rejected even though they are ``int`` subclasses.
    """

    if isinstance(value, bool) or value is None:
        return InputValidation(False, "Amount must be a number")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return InputValidation(False, "Amount must be a number")
    if not isinstance(value, (int, float)):
        return InputValidation(False, "Amount must be a number")
    if value != value:  # NaN
        return InputValidation(False, "Amount must be a number")
    if not (MIN_AMOUNT < value < MAX_AMOUNT):
        return InputValidation(
            False, f"Amount must be greater than {MIN_AMOUNT:g} and less than {MAX_AMOUNT:g}"
        )
    return InputValidation(True, None)


def validate_category(
    value: object, *, allowed: Sequence[str] = ALLOWED_CATEGORIES
) -> InputValidation:
    """Check that ``value`` names one of ``allowed`` (case-insensitive)."""

    if not isinstance(value, str) or not value.strip():
        return InputValidation(False, "Category cannot be empty")
    if value.strip().lower() not in {c.lower() for c in allowed}:
        return InputValidation(False, "Category must be one of: " + ", ".join(allowed))
    return InputValidation(True, None)


# ---------------------------------------------------------------------------
# Entity
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, eq=False)
class Transaction:
    """A single expense entry.

    Attributes
    ----------
    amount:
        Positive amount strictly below ``MAX_AMOUNT``.
    category:
        One of :data:`ALLOWED_CATEGORIES`; normalized to lower case.
    timestamp:
        Creation time as ``dd-mm-YYYY HH:MM``. Filled in when omitted.

    Equality is identity: two entries with identical fields are still two
    separate transactions, and removing one from a ledger leaves the other.
    """

    amount: float
    category: str
    timestamp: str = field(default_factory=current_timestamp)

    def __post_init__(self) -> None:
        amount_check = validate_amount(self.amount)
        if not amount_check.ok:
            raise ValueError(f"Transaction.amount: {amount_check.reason}")
        category_check = validate_category(self.category)
        if not category_check.ok:
            raise ValueError(f"Transaction.category: {category_check.reason}")
        # Frozen dataclass: normalize through object.__setattr__.
        object.__setattr__(self, "amount", float(self.amount))
        object.__setattr__(self, "category", self.category.strip().lower())
        if not isinstance(self.timestamp, str) or not self.timestamp.strip():
            raise ValueError("Transaction.timestamp must be a non-empty string")


Transactions: TypeAlias = Sequence[Transaction]
"""An ordered, read-only view of transactions as returned by the ledger."""


__all__ = [
    "ALLOWED_CATEGORIES",
    "MAX_AMOUNT",
    "MIN_AMOUNT",
    "TIMESTAMP_FORMAT",
    "InputValidation",
    "Transaction",
    "Transactions",
    "current_timestamp",
    "validate_amount",
    "validate_category",
]
