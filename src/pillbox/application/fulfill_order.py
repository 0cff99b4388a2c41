"""Application service: Fulfill Order use case.

Orchestrates the domain service (ledger update) and the Order aggregate
(state transition), then persists the order and every item it touched in
a single storage call.
"""

from __future__ import annotations

from dataclasses import dataclass

from pillbox.application.command import Command, rollback_on_failure
from pillbox.application.dto import OrderDTO
from pillbox.application.order_lookup import find_order
from pillbox.domain.model.ledger import ItemLedger
from pillbox.domain.repository.storage import Storage
from pillbox.domain.service.order_processor import OrderProcessor


@dataclass(frozen=True)
class FulfillOrderCommand(Command):

    order_ref: str

    def execute(self, ledger: ItemLedger, storage: Storage) -> OrderDTO:
        order = find_order(storage, self.order_ref)

        with rollback_on_failure(ledger):
            touched = OrderProcessor().apply_order(order, ledger)
            storage.save_order(order, items=touched)

        return OrderDTO.from_order(order)
