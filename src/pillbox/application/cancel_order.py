"""Application service: Cancel Order use case.

Only PENDING orders can be cancelled, and since a pending order has not
touched the ledger there is no stock to give back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pillbox.application.command import Command
from pillbox.application.dto import OrderDTO
from pillbox.application.order_lookup import find_order
from pillbox.domain.model.ledger import ItemLedger
from pillbox.domain.repository.storage import Storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CancelOrderCommand(Command):

    order_ref: str

    def execute(self, ledger: ItemLedger, storage: Storage) -> OrderDTO:
        order = find_order(storage, self.order_ref)
        order.cancel()
        storage.save_order(order)
        logger.info("Cancelled order %s", order.id)
        return OrderDTO.from_order(order)
