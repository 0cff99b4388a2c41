"""Application service: Exit use case — ends an interactive session."""

from __future__ import annotations

from dataclasses import dataclass

from pillbox.application.command import Command
from pillbox.domain.model.ledger import ItemLedger
from pillbox.domain.repository.storage import Storage


@dataclass(frozen=True)
class ExitCommand(Command):

    def execute(self, ledger: ItemLedger, storage: Storage) -> None:
        return None

    def is_exit(self) -> bool:
        return True
