"""Domain service: Order Processor.

Applies a PENDING order to the ledger and transitions it to FULFILLED.
It lives in the domain layer because the all-or-nothing rule is a core
business rule, not just orchestration.

The two-phase approach (validate-then-apply) ensures the ledger is never
left half-updated when one line of a dispense order cannot be covered.
This validate-then-apply section is the only read-then-write window on
the ledger.
"""

from __future__ import annotations

import logging

from pillbox.domain.exceptions import (
    ConsistencyError,
    DomainException,
    InsufficientStockError,
    InvalidStateError,
    ValidationError,
)
from pillbox.domain.model.item import Item
from pillbox.domain.model.ledger import ItemLedger
from pillbox.domain.model.order import Order, OrderStatus, OrderType

logger = logging.getLogger(__name__)


class OrderProcessor:

    def apply_order(self, order: Order, ledger: ItemLedger) -> list[Item]:
        """Apply every line of *order* to *ledger*, then fulfil the order.

        Uses a two-phase approach:
          Phase 1 — validate: for DISPENSE orders, check that the ledger
                    covers the cumulative demand of every line.  Fails on
                    the first uncovered line before any mutation.
          Phase 2 — apply: add (PURCHASE) or remove (DISPENSE) each line
                    in list order.

        Returns the resulting state of every item the order touched, in
        first-touched order, so the caller can persist exactly those.
        """
        if order.status != OrderStatus.PENDING:
            raise InvalidStateError(
                f"Cannot apply order {order.id} — current status is "
                f"{order.status.value}, expected PENDING"
            )

        lines = order.items
        if not lines:
            raise ValidationError(f"Order {order.id} has no items to apply")

        # Phase 1: validate without mutating
        if order.type == OrderType.DISPENSE:
            demand: dict[str, int] = {}
            for line in lines:
                demand[line.item_name] = demand.get(line.item_name, 0) + line.quantity
                if not ledger.has_sufficient_stock(line.item_name, demand[line.item_name]):
                    raise InsufficientStockError(
                        line.item_name,
                        demand[line.item_name],
                        ledger.get_quantity(line.item_name),
                    )

        # Phase 2: apply
        snapshot = ledger.snapshot()
        touched: dict[str, Item] = {}
        try:
            for line in lines:
                if order.type == OrderType.PURCHASE:
                    item = ledger.add_item(line.item_name, line.quantity)
                else:
                    item = ledger.remove_item(line.item_name, line.quantity)
                touched[item.name] = item
        except DomainException as exc:
            ledger.restore(snapshot)
            raise ConsistencyError(
                f"Order {order.id} failed after validation passed: {exc}"
            ) from exc

        order.fulfill()
        logger.info(
            "Applied %s order %s (%d lines)",
            order.type.value, order.id, len(lines),
        )
        return list(touched.values())
