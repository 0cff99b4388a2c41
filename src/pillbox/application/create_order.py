"""Application service: Create Order use case.

Builds a PENDING order from the requested lines.  Nothing touches the
ledger until the order is fulfilled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pillbox.application.command import Command
from pillbox.application.dto import OrderDTO, OrderItemSpec
from pillbox.domain.exceptions import ValidationError
from pillbox.domain.model.ledger import ItemLedger
from pillbox.domain.model.order import Order, OrderType
from pillbox.domain.repository.storage import Storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateOrderCommand(Command):

    order_type: OrderType
    items: tuple[OrderItemSpec, ...] = ()
    notes: str = ""

    def execute(self, ledger: ItemLedger, storage: Storage) -> OrderDTO:
        """Create a new order.

        Steps:
        1. Create an empty PENDING order of the requested type.
        2. Append each requested line (rejects non-positive quantities).
        3. Persist and return a DTO.
        """
        if not self.items:
            raise ValidationError("Order must contain at least one item")

        order = Order.create(self.order_type, self.notes)
        for spec in self.items:
            order.add_item(spec.item_name, spec.quantity)

        storage.save_order(order)
        logger.info(
            "Created %s order %s with %d lines",
            order.type.value, order.id, len(self.items),
        )
        return OrderDTO.from_order(order)
