"""Application service: Delete Item use case.

Without a quantity the whole entry is dropped from the ledger; with one,
only that many units are removed and the usual stock check applies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pillbox.application.command import Command, rollback_on_failure
from pillbox.application.dto import ItemDTO
from pillbox.domain.model.item import Item
from pillbox.domain.model.ledger import ItemLedger
from pillbox.domain.repository.storage import Storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteItemCommand(Command):

    name: str
    quantity: int | None = None

    def execute(self, ledger: ItemLedger, storage: Storage) -> ItemDTO:
        with rollback_on_failure(ledger):
            if self.quantity is None:
                removed = ledger.delete_item(self.name)
                item = Item(self.name.strip(), 0)
            else:
                removed = self.quantity
                item = ledger.remove_item(self.name, self.quantity)
            storage.save_item(item)

        logger.info("Removed %d of %s (now %d)", removed, item.name, item.quantity)
        return ItemDTO.from_item(item)
