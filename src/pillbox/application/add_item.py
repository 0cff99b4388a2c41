"""Application service: Add Item use case."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pillbox.application.command import Command, rollback_on_failure
from pillbox.application.dto import ItemDTO
from pillbox.domain.model.ledger import ItemLedger
from pillbox.domain.repository.storage import Storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddItemCommand(Command):

    name: str
    quantity: int

    def execute(self, ledger: ItemLedger, storage: Storage) -> ItemDTO:
        """Receive *quantity* units of *name* into stock and persist the new level."""
        with rollback_on_failure(ledger):
            item = ledger.add_item(self.name, self.quantity)
            storage.save_item(item)

        logger.info("Added %d of %s (now %d)", self.quantity, item.name, item.quantity)
        return ItemDTO.from_item(item)
