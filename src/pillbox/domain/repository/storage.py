"""Abstract storage for ledger items and orders.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON, in-memory) live in
the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from collections.abc import Iterable

from pillbox.domain.model.item import Item
from pillbox.domain.model.order import Order


class Storage(ABC):

    @abstractmethod
    def load_items(self) -> list[Item]:
        """Return every persisted item, used once to rehydrate the ledger."""

    @abstractmethod
    def save_item(self, item: Item) -> None:
        """Persist the current state of one item.

        A quantity of zero removes the item's record.
        """

    @abstractmethod
    def list_orders(self) -> list[Order]:
        """Return copies of every persisted order."""

    @abstractmethod
    def get_order(self, order_id: uuid.UUID) -> Order | None:
        """Return a copy of an order by its ID, or None if not found."""

    @abstractmethod
    def save_order(self, order: Order, items: Iterable[Item] = ()) -> None:
        """Persist a new or updated order together with the item states it changed."""
