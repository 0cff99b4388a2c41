"""Application service: List Items use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from pillbox.application.command import Command
from pillbox.application.dto import ItemDTO
from pillbox.domain.model.ledger import ItemLedger
from pillbox.domain.repository.storage import Storage


@dataclass(frozen=True)
class ListItemsCommand(Command):

    def execute(self, ledger: ItemLedger, storage: Storage) -> list[ItemDTO]:
        return [ItemDTO.from_item(item) for item in ledger.items()]
