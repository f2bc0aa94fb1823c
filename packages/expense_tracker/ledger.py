"""In-memory transaction ledger with change notification.

``Ledger`` is the data model of the expense tracker. It owns three
collections and nothing else:

- the ordered list of transactions (duplicates allowed);
- the matched-filter indices, a cache of the last externally computed filter
  result, cleared whenever the transaction list changes;
- the registered listeners, notified synchronously after every successful
  mutation.

Validation happens before any state change. The single error kind is
``ValueError``; removal of absent items and duplicate registrations are
signalled through no-ops and ``False`` return values instead.

Callers receive copies from every accessor, so nothing they do to a returned
collection can reach the stored state.
"""

from __future__ import annotations

import operator
from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from .logging_setup import get_logger

_logger = get_logger("expense_tracker.ledger")


@runtime_checkable
class LedgerListener(Protocol):
    """Capability required to observe a :class:`Ledger`.

    ``update`` receives the ledger itself so the listener can re-query
    whatever state it needs.
    """

    def update(self, model: Ledger) -> None: ...


class Ledger:
    """Transactions, matched-filter indices and listeners of one session."""

    def __init__(self) -> None:
        # Each entry must be non-None.
        self._transactions: list[Any] = []
        # Each index in 0..len(self._transactions) - 1 when set.
        self._matched_filter_indices: list[int] = []
        self._observers: list[LedgerListener] = []

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_transaction(self, t: Any) -> None:
        """Append ``t`` and invalidate the matched-filter indices.

        Raises ``ValueError`` when ``t`` is ``None``; nothing changes and no
        listener is notified in that case.
        """

        if t is None:
            raise ValueError("The new transaction must be non-null.")
        self._transactions.append(t)
        self._matched_filter_indices.clear()
        _logger.debug("transaction added count=%d", len(self._transactions))
        self._state_changed()

    def remove_transaction(self, t: Any) -> None:
        """Remove the first transaction equal to ``t``, if any.

        Absent or ``None`` arguments are not an error. The matched-filter
        indices are cleared and listeners are notified even when nothing was
        removed; existing callers rely on that refresh, so it stays
        unconditional.
        """

        try:
            self._transactions.remove(t)
            removed = True
        except ValueError:
            removed = False
        self._matched_filter_indices.clear()
        _logger.debug(
            "transaction remove removed=%s count=%d", removed, len(self._transactions)
        )
        self._state_changed()

    def set_matched_filter_indices(self, new_indices: Iterable[int] | None) -> None:
        """Replace the matched-filter indices with a copy of ``new_indices``.

        Every element must be an integer (anything ``operator.index`` accepts,
        except ``bool``) between 0 and the number of transactions minus one
        (inclusive). Elements are stored as plain ``int``. All are checked before
        anything is stored; on failure ``ValueError`` is raised and the
        previous indices are kept.
        """

        if new_indices is None:
            raise ValueError("The matched filter indices list must be non-null.")
        upper = len(self._transactions) - 1
        candidate: list[int] = []
        for raw in new_indices:
            # bool is an int subclass but never a position.
            if isinstance(raw, bool):
                raise ValueError(f"Each matched filter index must be an integer, got {raw!r}.")
            try:
                index = operator.index(raw)
            except TypeError:
                raise ValueError(
                    f"Each matched filter index must be an integer, got {raw!r}."
                ) from None
            if index < 0 or index > upper:
                raise ValueError(
                    "Each matched filter index must be between 0 (inclusive) and "
                    f"the number of transactions (exclusive); got {index} with "
                    f"{len(self._transactions)} transactions."
                )
            candidate.append(index)
        self._matched_filter_indices = candidate
        _logger.debug("matched filter indices set count=%d", len(candidate))
        self._state_changed()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_transactions(self) -> tuple[Any, ...]:
        """Return a read-only snapshot of the transactions in insertion order."""

        return tuple(self._transactions)

    def get_matched_filter_indices(self) -> list[int]:
        return list(self._matched_filter_indices)

    # ------------------------------------------------------------------
    # Observer registry
    # ------------------------------------------------------------------

    def register(self, listener: LedgerListener | None) -> bool:
        """Register ``listener`` for state-change notifications.

        Returns ``False`` without changing anything when ``listener`` is
        ``None`` or already registered, ``True`` otherwise. Registering does
        not trigger a notification.
        """

        if listener is None:
            return False
        if self.contains_listener(listener):
            return False
        self._observers.append(listener)
        return True

    def number_of_listeners(self) -> int:
        return len(self._observers)

    def contains_listener(self, listener: LedgerListener | None) -> bool:
        return listener in self._observers

    def _state_changed(self) -> None:
        """Deliver ``self`` to every listener in registration order.

        Iterates over a snapshot of the registry. A listener that raises
        aborts the pass and the error reaches the caller of the mutation,
        which has already been applied.
        """

        for observer in tuple(self._observers):
            observer.update(self)


__all__ = ["Ledger", "LedgerListener"]
