"""Unit tests for the OrderProcessor domain service."""

import pytest

from pillbox.domain.exceptions import (
    ConsistencyError,
    InsufficientStockError,
    InvalidStateError,
    ValidationError,
)
from pillbox.domain.model.item import Item
from pillbox.domain.model.ledger import ItemLedger
from pillbox.domain.model.order import Order, OrderStatus, OrderType
from pillbox.domain.service.order_processor import OrderProcessor


def _ledger(**stock: int) -> ItemLedger:
    return ItemLedger.from_items(Item(name, qty) for name, qty in stock.items())


def _order(order_type: OrderType, *lines: tuple[str, int], notes: str = "") -> Order:
    order = Order.create(order_type, notes)
    for name, qty in lines:
        order.add_item(name, qty)
    return order


class TestApplyPurchase:

    def test_purchase_adds_stock_and_fulfills(self):
        ledger = ItemLedger()
        order = _order(OrderType.PURCHASE, ("gauze", 100), notes="restock")

        touched = OrderProcessor().apply_order(order, ledger)

        assert ledger.get_quantity("gauze") == 100
        assert order.status == OrderStatus.FULFILLED
        assert order.fulfilled_at >= order.created_at
        assert touched == [Item("gauze", 100)]

    def test_repeated_name_touched_once_with_final_quantity(self):
        ledger = _ledger(gauze=1)
        order = _order(OrderType.PURCHASE, ("gauze", 2), ("tape", 1), ("gauze", 3))

        touched = OrderProcessor().apply_order(order, ledger)

        assert touched == [Item("gauze", 6), Item("tape", 1)]


class TestApplyDispense:

    def test_dispense_to_zero_then_again_fails(self):
        ledger = _ledger(tape=5)
        first = _order(OrderType.DISPENSE, ("tape", 5))

        touched = OrderProcessor().apply_order(first, ledger)
        assert ledger.get_quantity("tape") == 0
        assert touched == [Item("tape", 0)]

        second = _order(OrderType.DISPENSE, ("tape", 5))
        with pytest.raises(InsufficientStockError):
            OrderProcessor().apply_order(second, ledger)
        assert second.status == OrderStatus.PENDING

    def test_all_or_nothing(self):
        ledger = _ledger(A=5)
        order = _order(OrderType.DISPENSE, ("A", 3), ("B", 2))

        with pytest.raises(InsufficientStockError) as info:
            OrderProcessor().apply_order(order, ledger)

        assert info.value.item_name == "B"
        assert info.value.shortfall == 2
        assert ledger.get_quantity("A") == 5
        assert order.status == OrderStatus.PENDING
        assert order.fulfilled_at is None

    def test_cumulative_demand_for_repeated_item(self):
        ledger = _ledger(A=5)
        order = _order(OrderType.DISPENSE, ("A", 3), ("A", 3))

        with pytest.raises(InsufficientStockError) as info:
            OrderProcessor().apply_order(order, ledger)

        assert info.value.requested == 6
        assert info.value.available == 5
        assert ledger.get_quantity("A") == 5

    def test_first_failing_line_reported(self):
        ledger = _ledger(A=1)
        order = _order(OrderType.DISPENSE, ("C", 1), ("A", 2))

        with pytest.raises(InsufficientStockError, match="for C"):
            OrderProcessor().apply_order(order, ledger)


class TestApplyPreconditions:

    def test_non_pending_rejected(self):
        ledger = _ledger(A=5)
        order = _order(OrderType.DISPENSE, ("A", 1))
        order.cancel()

        with pytest.raises(InvalidStateError, match="CANCELLED"):
            OrderProcessor().apply_order(order, ledger)
        assert ledger.get_quantity("A") == 5

    def test_already_fulfilled_rejected(self):
        ledger = ItemLedger()
        order = _order(OrderType.PURCHASE, ("A", 1))
        OrderProcessor().apply_order(order, ledger)

        with pytest.raises(InvalidStateError):
            OrderProcessor().apply_order(order, ledger)
        assert ledger.get_quantity("A") == 1

    def test_empty_order_rejected(self):
        with pytest.raises(ValidationError, match="no items"):
            OrderProcessor().apply_order(Order.create(OrderType.PURCHASE), ItemLedger())


class _BrokenLedger(ItemLedger):
    """Reports stock it cannot actually deliver."""

    def has_sufficient_stock(self, name, quantity):
        return True


class TestApplyConsistency:

    def test_failure_after_validation_restores_ledger(self):
        ledger = _BrokenLedger()
        ledger.add_item("A", 5)
        order = _order(OrderType.DISPENSE, ("A", 2), ("B", 1))

        with pytest.raises(ConsistencyError):
            OrderProcessor().apply_order(order, ledger)

        assert ledger.get_quantity("A") == 5
        assert order.status == OrderStatus.PENDING
