from __future__ import annotations

import logging

import pytest

from expense_tracker.controller import ExpenseTrackerController
from expense_tracker.ledger import Ledger


class _CountingView:
    def __init__(self) -> None:
        self.updates = 0

    def update(self, model: Ledger) -> None:
        self.updates += 1


@pytest.fixture
def controller() -> ExpenseTrackerController:
    return ExpenseTrackerController(Ledger(), _CountingView())


def test_view_is_registered_on_construction(controller):
    assert controller.model.contains_listener(controller.view)
    assert controller.model.number_of_listeners() == 1


def test_controller_without_view_registers_nothing():
    c = ExpenseTrackerController(Ledger())
    assert c.model.number_of_listeners() == 0


def test_add_valid_transaction(controller):
    assert controller.add_transaction("19.99", "Travel") is True
    (tx,) = controller.model.get_transactions()
    assert tx.amount == pytest.approx(19.99)
    assert tx.category == "travel"
    assert controller.view.updates == 1
    assert controller.last_error is None


@pytest.mark.parametrize(
    ("amount", "category", "fragment"),
    [
        (0, "food", "Amount"),
        (1000, "food", "Amount"),
        ("ten", "food", "Amount"),
        (10, "shoes", "Category"),
        (10, "", "Category"),
    ],
)
def test_add_invalid_input_is_rejected(controller, caplog, amount, category, fragment):
    with caplog.at_level(logging.WARNING, logger="expense_tracker"):
        assert controller.add_transaction(amount, category) is False

    assert controller.model.get_transactions() == ()
    assert controller.view.updates == 0
    assert fragment in (controller.last_error or "")
    assert any("input rejected" in r.getMessage() for r in caplog.records)


def test_remove_by_position(controller):
    controller.add_transaction(1, "food")
    controller.add_transaction(2, "bills")
    first, second = controller.model.get_transactions()

    assert controller.remove_transaction(0) is True
    assert controller.model.get_transactions() == (second,)


@pytest.mark.parametrize("position", [-1, 1, 5, True, "0"])
def test_remove_rejects_bad_positions(controller, position):
    controller.add_transaction(1, "food")
    updates = controller.view.updates

    assert controller.remove_transaction(position) is False
    assert len(controller.model.get_transactions()) == 1
    assert controller.view.updates == updates


def test_mark_and_clear(controller):
    for amount in (1, 2, 3):
        controller.add_transaction(amount, "other")

    assert controller.mark([0, 2]) is True
    assert controller.model.get_matched_filter_indices() == [0, 2]

    assert controller.clear_marks() is True
    assert controller.model.get_matched_filter_indices() == []


def test_mark_out_of_range_is_reported_not_raised(controller):
    controller.add_transaction(1, "other")
    controller.mark([0])

    assert controller.mark([0, 3]) is False
    assert "between 0" in (controller.last_error or "")
    assert controller.model.get_matched_filter_indices() == [0]


@pytest.mark.parametrize("positions", [None, 3, object()])
def test_mark_rejects_missing_or_non_iterable_positions(controller, positions):
    controller.add_transaction(1, "other")
    controller.mark([0])
    updates = controller.view.updates

    assert controller.mark(positions) is False
    assert "rows to mark" in (controller.last_error or "")
    assert controller.model.get_matched_filter_indices() == [0]
    assert controller.view.updates == updates


def test_adding_after_mark_clears_marks(controller):
    controller.add_transaction(1, "other")
    controller.mark([0])
    controller.add_transaction(2, "other")
    assert controller.model.get_matched_filter_indices() == []
