"""Text rendering of a ledger and the listener that prints it."""

from __future__ import annotations

import sys
from typing import TextIO

from .ledger import Ledger

_HEADER = f"  {'#':>3}  {'Amount':>9}  {'Category':<13}  {'Date':<16}"


def render_table(model: Ledger) -> str:
    """Return the ledger as a fixed-width table.

    Rows whose index is among the matched-filter indices are prefixed with
    ``*``. The last line carries the sum of all amounts.
    """

    transactions = model.get_transactions()
    matched = set(model.get_matched_filter_indices())

    lines = [_HEADER, "  " + "-" * (len(_HEADER) - 2)]
    if not transactions:
        lines.append("  (no transactions)")
    total = 0.0
    for pos, tx in enumerate(transactions):
        marker = "*" if pos in matched else " "
        lines.append(
            f"{marker} {pos + 1:>3}  {tx.amount:>9.2f}  {tx.category:<13}  {tx.timestamp:<16}".rstrip()
        )
        total += tx.amount
    lines.append(f"Total  {total:>9.2f}")
    return "\n".join(lines)


class TransactionTableView:
    """Listener that re-renders the whole table on every ledger change."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self.render_count = 0

    def update(self, model: Ledger) -> None:
        self.show(model)

    def show(self, model: Ledger) -> None:
        print(render_table(model), file=self._stream)
        self.render_count += 1


__all__ = ["TransactionTableView", "render_table"]
