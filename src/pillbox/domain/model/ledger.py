"""ItemLedger aggregate — the single source of truth for stock on hand.

The ledger maps item names to non-negative quantities.  Every mutation is
a signed delta that is either applied in full or not at all.  Entries are
pruned once they reach zero, so an absent name and a depleted name read
the same: ``get_quantity`` returns 0 for both.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pillbox.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from pillbox.domain.model.item import Item

logger = logging.getLogger(__name__)


class ItemLedger:
    """Aggregate root for stock levels.

    Invariants:
    - every stored quantity is > 0 (zero entries are pruned)
    - a failed mutation leaves the mapping untouched
    """

    def __init__(self) -> None:
        self._stock: dict[str, int] = {}

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def from_items(items: Iterable[Item]) -> ItemLedger:
        """Rehydrate a ledger from persisted items.

        Zero-quantity records are skipped and duplicate names are summed.
        """
        ledger = ItemLedger()
        for item in items:
            if item.quantity > 0:
                ledger.add_item(item.name, item.quantity)
        return ledger

    # --- Mutations ------------------------------------------------------------

    def add_item(self, name: str, quantity: int) -> Item:
        """Increase *name* by *quantity*, creating the entry if absent."""
        name = _check_name(name)
        _check_quantity(quantity)
        self._stock[name] = self._stock.get(name, 0) + quantity
        logger.debug("Ledger +%d %s (now %d)", quantity, name, self._stock[name])
        return Item(name, self._stock[name])

    def remove_item(self, name: str, quantity: int) -> Item:
        """Decrease *name* by *quantity*.

        Raises InsufficientStockError, without touching the entry, if fewer
        than *quantity* units are on hand.
        """
        name = _check_name(name)
        _check_quantity(quantity)
        available = self._stock.get(name, 0)
        if quantity > available:
            raise InsufficientStockError(name, quantity, available)

        remaining = available - quantity
        if remaining:
            self._stock[name] = remaining
        else:
            del self._stock[name]
        logger.debug("Ledger -%d %s (now %d)", quantity, name, remaining)
        return Item(name, remaining)

    def delete_item(self, name: str) -> int:
        """Remove the whole entry for *name* and return how much was on hand."""
        name = _check_name(name)
        if name not in self._stock:
            raise EntityNotFoundError(f"Item not found: '{name}'")
        return self._stock.pop(name)

    # --- Queries --------------------------------------------------------------

    def get_quantity(self, name: str) -> int:
        return self._stock.get(name.strip(), 0) if isinstance(name, str) else 0

    def has_sufficient_stock(self, name: str, quantity: int) -> bool:
        return self.get_quantity(name) >= quantity

    def items(self) -> list[Item]:
        """Return every stocked item, sorted by name."""
        return [Item(name, qty) for name, qty in sorted(self._stock.items())]

    # --- Undo support ---------------------------------------------------------

    def snapshot(self) -> dict[str, int]:
        return dict(self._stock)

    def restore(self, snapshot: dict[str, int]) -> None:
        self._stock = dict(snapshot)

    # --- Container protocol ---------------------------------------------------

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self._stock

    def __len__(self) -> int:
        return len(self._stock)

    def __repr__(self) -> str:
        return f"ItemLedger({self._stock!r})"


def _check_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Item name is required")
    return name.strip()


def _check_quantity(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise ValidationError(
            f"Quantity must be an integer, got {type(quantity).__name__}"
        )
    if quantity <= 0:
        raise ValidationError("Quantity must be positive")
