"""JSON-file-backed implementation of Storage.

Items and orders live in two files under one data directory.  Every
write goes to a temporary sibling first and is then moved into place, so
an interrupted write never leaves a truncated file behind.
"""

from __future__ import annotations

import json
import logging
import os
import uuid
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from pillbox.domain.exceptions import StorageError, ValidationError
from pillbox.domain.model.item import Item
from pillbox.domain.model.order import Order, OrderItem, OrderStatus, OrderType
from pillbox.domain.repository.storage import Storage

logger = logging.getLogger(__name__)


class JsonStorage(Storage):

    def __init__(self, data_dir: Path) -> None:
        self._items_path = Path(data_dir) / "items.json"
        self._orders_path = Path(data_dir) / "orders.json"
        self._ensure_file(self._items_path)
        self._ensure_file(self._orders_path)

    # --- Storage interface ----------------------------------------------------

    def load_items(self) -> list[Item]:
        return [self._item_to_domain(raw) for raw in self._load_raw(self._items_path)]

    def save_item(self, item: Item) -> None:
        self._persist_raw(self._items_path, self._upsert_items([item]))

    def list_orders(self) -> list[Order]:
        return [self._order_to_domain(raw) for raw in self._load_raw(self._orders_path)]

    def get_order(self, order_id: uuid.UUID) -> Order | None:
        for raw in self._load_raw(self._orders_path):
            if self._field(self._orders_path, raw, "id") == str(order_id):
                return self._order_to_domain(raw)
        return None

    def save_order(self, order: Order, items: Iterable[Item] = ()) -> None:
        orders = self._load_raw(self._orders_path)

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if self._field(self._orders_path, raw, "id") == str(order.id):
                orders[i] = self._order_to_raw(order)
                replaced = True
                break
        if not replaced:
            orders.append(self._order_to_raw(order))

        items = list(items)
        if not items:
            self._persist_raw(self._orders_path, orders)
            return

        # Items first; put them back if the order file cannot follow
        previous = self._load_raw(self._items_path)
        self._persist_raw(self._items_path, self._upsert_items(items))
        try:
            self._persist_raw(self._orders_path, orders)
        except StorageError:
            self._persist_raw(self._items_path, previous)
            raise

    # --- Serialization --------------------------------------------------------

    def _upsert_items(self, items: list[Item]) -> list[dict]:
        """Merge *items* into the stored item records; zero quantity drops a record."""
        records = {
            self._field(self._items_path, raw, "name"): raw
            for raw in self._load_raw(self._items_path)
        }
        for item in items:
            if item.quantity:
                records[item.name] = self._item_to_raw(item)
            else:
                records.pop(item.name, None)
        return sorted(records.values(), key=lambda raw: raw["name"])

    @staticmethod
    def _item_to_raw(item: Item) -> dict:
        return {"name": item.name, "quantity": item.quantity}

    @staticmethod
    def _item_to_domain(raw: dict) -> Item:
        try:
            return Item(name=raw["name"], quantity=raw["quantity"])
        except (KeyError, TypeError, ValidationError) as exc:
            raise StorageError(f"Corrupt item record: {raw!r}") from exc

    @staticmethod
    def _order_to_raw(order: Order) -> dict:
        return {
            "id": str(order.id),
            "type": order.type.value,
            "status": order.status.value,
            "notes": order.notes,
            "created_at": order.created_at.isoformat(),
            "fulfilled_at": (
                order.fulfilled_at.isoformat() if order.fulfilled_at is not None else None
            ),
            "items": [
                {"item_name": line.item_name, "quantity": line.quantity}
                for line in order.items
            ],
        }

    @staticmethod
    def _order_to_domain(raw: dict) -> Order:
        try:
            return Order.restore(
                order_id=uuid.UUID(raw["id"]),
                order_type=OrderType(raw["type"]),
                notes=raw.get("notes", ""),
                status=OrderStatus(raw["status"]),
                created_at=datetime.fromisoformat(raw["created_at"]),
                fulfilled_at=(
                    datetime.fromisoformat(raw["fulfilled_at"])
                    if raw.get("fulfilled_at")
                    else None
                ),
                items=[OrderItem(i["item_name"], i["quantity"]) for i in raw["items"]],
            )
        except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as exc:
            raise StorageError(f"Corrupt order record: {raw!r}") from exc

    # --- File helpers ---------------------------------------------------------

    @staticmethod
    def _field(path: Path, raw: dict, name: str) -> object:
        try:
            return raw[name]
        except (KeyError, TypeError, IndexError) as exc:
            raise StorageError(f"Corrupt record in {path}: {raw!r}") from exc

    @staticmethod
    def _load_raw(path: Path) -> list[dict]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read {path}: {exc}") from exc
        if not isinstance(data, list):
            raise StorageError(f"Cannot read {path}: expected a JSON list")
        return data

    @staticmethod
    def _persist_raw(path: Path, records: list[dict]) -> None:
        tmp = path.with_name(path.name + ".tmp")
        try:
            tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp, path)
        except OSError as exc:
            raise StorageError(f"Cannot write {path}: {exc}") from exc
        logger.debug("Wrote %d records to %s", len(records), path)

    @staticmethod
    def _ensure_file(path: Path) -> None:
        if path.exists():
            return
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot create {path}: {exc}") from exc
