"""Application service: Help use case (query).

Produces usage lines only; how they are printed is up to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass

from pillbox.application.command import Command
from pillbox.application.dto import HelpDTO
from pillbox.domain.model.ledger import ItemLedger
from pillbox.domain.repository.storage import Storage

SUMMARY: dict[str, str] = {
    "help": "Shows this help message",
    "item": "Adds, deletes or lists stocked items",
    "order": "Creates, fulfills, cancels or shows orders",
    "exit": "Exits the interactive shell",
}

USAGE: dict[str, list[str]] = {
    "help": [
        "help: Shows help information about available commands.",
        "Usage: help [TOPIC]",
        "  [TOPIC] - Optional. A command to get detailed help on.",
    ],
    "item": [
        "item add: Receives stock of an item into the inventory.",
        "Usage: item add --name NAME --quantity QTY",
        "item delete: Removes stock of an item from the inventory.",
        "Usage: item delete --name NAME [--quantity QTY]",
        "  Without --quantity the whole item is removed.",
        "item list: Displays all items in the inventory.",
        "Usage: item list",
    ],
    "order": [
        "order create: Records a pending purchase or dispense order.",
        "Usage: order create --type purchase|dispense --items NAME:QTY,... [--notes TEXT]",
        "order fulfill: Applies a pending order to the inventory.",
        "Usage: order fulfill --id ORDER_ID",
        "order cancel: Cancels a pending order without touching stock.",
        "Usage: order cancel --id ORDER_ID",
        "order show: Displays one order.",
        "Usage: order show --id ORDER_ID",
        "order list: Displays all orders, oldest first.",
        "Usage: order list [--status pending|fulfilled|cancelled]",
        "  ORDER_ID may be the full id or a unique prefix of it.",
    ],
    "exit": [
        "exit: Exits the interactive shell.",
        "Usage: exit",
    ],
}


@dataclass(frozen=True)
class HelpCommand(Command):

    topic: str | None = None

    def execute(self, ledger: ItemLedger, storage: Storage) -> HelpDTO:
        if self.topic is None:
            lines = ["Available commands:"]
            lines += [f"  {name:<7} - {text}" for name, text in SUMMARY.items()]
            lines.append("Type 'help <command>' for more information on a specific command.")
            return HelpDTO(topic=None, lines=lines)

        topic = self.topic.strip().lower()
        if topic not in USAGE:
            return HelpDTO(
                topic=topic,
                lines=[
                    f"Unknown command: {self.topic}",
                    "Type 'help' for a list of available commands.",
                ],
            )
        return HelpDTO(topic=topic, lines=list(USAGE[topic]))
