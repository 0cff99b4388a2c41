"""Application service: List Orders use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from pillbox.application.command import Command
from pillbox.application.dto import OrderDTO
from pillbox.domain.model.ledger import ItemLedger
from pillbox.domain.model.order import OrderStatus
from pillbox.domain.repository.storage import Storage


@dataclass(frozen=True)
class ListOrdersCommand(Command):

    status: OrderStatus | None = None

    def execute(self, ledger: ItemLedger, storage: Storage) -> list[OrderDTO]:
        """Return orders oldest first, optionally only those in *status*."""
        orders = sorted(storage.list_orders(), key=lambda o: o.created_at)
        if self.status is not None:
            orders = [o for o in orders if o.status == self.status]
        return [OrderDTO.from_order(o) for o in orders]
