"""Order aggregate — a recorded intent to move stock in or out.

An Order never touches the ledger itself.  It is a pure record whose
status is driven by the OrderProcessor (fulfil) or a command (cancel).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from pillbox.domain.exceptions import InvalidStateError, ValidationError


class OrderType(Enum):
    PURCHASE = "PURCHASE"  # stock coming in from a supplier
    DISPENSE = "DISPENSE"  # stock going out to a patient or ward


class OrderStatus(Enum):
    PENDING = "PENDING"
    FULFILLED = "FULFILLED"
    CANCELLED = "CANCELLED"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderItem:
    """A single (item, quantity) line.  Quantity is always positive."""

    item_name: str
    quantity: int

    def __post_init__(self) -> None:
        if not isinstance(self.item_name, str) or not self.item_name.strip():
            raise ValidationError("Order line requires an item name")
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool):
            raise ValidationError(
                f"Order line quantity must be an integer, "
                f"got {type(self.quantity).__name__}"
            )
        if self.quantity <= 0:
            raise ValidationError(
                f"Order line quantity for {self.item_name} must be positive"
            )


@dataclass
class Order:
    """Aggregate root for purchase and dispense orders.

    Use ``Order.create()`` for new orders.  ``Order.restore()`` rebuilds a
    persisted order without re-running lifecycle checks.

    The line items are owned exclusively by the order; ``items`` hands out
    a copy so callers cannot rewrite history through it.
    """

    id: uuid.UUID
    type: OrderType
    notes: str = ""
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=_now)
    fulfilled_at: datetime | None = None
    _items: list[OrderItem] = field(default_factory=list, init=False, repr=False)

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def create(order_type: OrderType, notes: str = "") -> Order:
        """Create a new PENDING order with no items."""
        if not isinstance(order_type, OrderType):
            raise ValidationError(f"Unknown order type: {order_type!r}")
        return Order(id=uuid.uuid4(), type=order_type, notes=(notes or "").strip())

    @staticmethod
    def restore(
        order_id: uuid.UUID,
        order_type: OrderType,
        notes: str,
        status: OrderStatus,
        created_at: datetime,
        fulfilled_at: datetime | None,
        items: list[OrderItem],
    ) -> Order:
        order = Order(
            id=order_id,
            type=order_type,
            notes=notes,
            status=status,
            created_at=created_at,
            fulfilled_at=fulfilled_at,
        )
        order._items = list(items)
        return order

    # --- Line items -----------------------------------------------------------

    def add_item(self, item_name: str, quantity: int) -> OrderItem:
        """Append a line.  Only allowed while the order is PENDING."""
        self._require_pending("add items to")
        line = OrderItem(
            item_name=item_name.strip() if isinstance(item_name, str) else item_name,
            quantity=quantity,
        )
        self._items.append(line)
        return line

    @property
    def items(self) -> list[OrderItem]:
        return list(self._items)

    # --- State transitions ----------------------------------------------------

    def fulfill(self) -> None:
        """Transition PENDING -> FULFILLED and stamp the fulfilment time.

        Ledger effects must already have been applied by the caller.
        """
        self._require_pending("fulfill")
        self.status = OrderStatus.FULFILLED
        self.fulfilled_at = max(_now(), self.created_at)

    def cancel(self) -> None:
        """Transition PENDING -> CANCELLED."""
        self._require_pending("cancel")
        self.status = OrderStatus.CANCELLED

    # --- Computed properties --------------------------------------------------

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self._items)

    # --- Internal helpers -----------------------------------------------------

    def _require_pending(self, action: str) -> None:
        if self.status != OrderStatus.PENDING:
            raise InvalidStateError(
                f"Cannot {action} order {self.id} — current status is "
                f"{self.status.value}, expected PENDING"
            )
