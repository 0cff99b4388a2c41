"""Application service: Show Order use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from pillbox.application.command import Command
from pillbox.application.dto import OrderDTO
from pillbox.application.order_lookup import find_order
from pillbox.domain.model.ledger import ItemLedger
from pillbox.domain.repository.storage import Storage


@dataclass(frozen=True)
class ShowOrderCommand(Command):

    order_ref: str

    def execute(self, ledger: ItemLedger, storage: Storage) -> OrderDTO:
        return OrderDTO.from_order(find_order(storage, self.order_ref))
