"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from pillbox.domain.model.item import Item
from pillbox.domain.model.order import Order


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one requested line (item name + quantity)."""

    item_name: str
    quantity: int


@dataclass(frozen=True)
class ItemDTO:
    name: str
    quantity: int

    @staticmethod
    def from_item(item: Item) -> ItemDTO:
        return ItemDTO(name=item.name, quantity=item.quantity)


@dataclass(frozen=True)
class OrderLineDTO:
    item_name: str
    quantity: int


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    type: str
    status: str
    notes: str
    items: list[OrderLineDTO]
    total_quantity: int
    created_at: str
    fulfilled_at: str | None  # None unless FULFILLED

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=str(order.id),
            type=order.type.value,
            status=order.status.value,
            notes=order.notes,
            items=[
                OrderLineDTO(item_name=line.item_name, quantity=line.quantity)
                for line in order.items
            ],
            total_quantity=order.total_quantity,
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            fulfilled_at=(
                order.fulfilled_at.strftime("%Y-%m-%d %H:%M UTC")
                if order.fulfilled_at is not None
                else None
            ),
        )


@dataclass(frozen=True)
class HelpDTO:
    """Output: usage lines for one command, or a summary of all of them."""

    topic: str | None
    lines: list[str]
