"""Tests for the JSON-file Storage."""

import json
import uuid

import pytest

from pillbox.domain.exceptions import StorageError
from pillbox.domain.model.item import Item
from pillbox.domain.model.order import Order, OrderStatus, OrderType
from pillbox.infrastructure.persistence.json_storage import JsonStorage


class TestJsonStorageItems:

    def test_creates_empty_files(self, tmp_path):
        storage = JsonStorage(tmp_path / "data")
        assert storage.load_items() == []
        assert storage.list_orders() == []
        assert (tmp_path / "data" / "items.json").read_text() == "[]"

    def test_saved_item_survives_reload(self, tmp_path):
        JsonStorage(tmp_path).save_item(Item("gauze", 10))
        assert JsonStorage(tmp_path).load_items() == [Item("gauze", 10)]

    def test_save_replaces_existing_record(self, tmp_path):
        storage = JsonStorage(tmp_path)
        storage.save_item(Item("gauze", 10))
        storage.save_item(Item("gauze", 4))
        assert storage.load_items() == [Item("gauze", 4)]

    def test_zero_quantity_removes_record(self, tmp_path):
        storage = JsonStorage(tmp_path)
        storage.save_item(Item("gauze", 10))
        storage.save_item(Item("tape", 1))
        storage.save_item(Item("gauze", 0))
        assert storage.load_items() == [Item("tape", 1)]

    def test_file_format(self, tmp_path):
        JsonStorage(tmp_path).save_item(Item("gauze", 10))
        raw = json.loads((tmp_path / "items.json").read_text())
        assert raw == [{"name": "gauze", "quantity": 10}]

    def test_corrupt_file_raises_storage_error(self, tmp_path):
        (tmp_path / "items.json").write_text("{not json")
        storage = JsonStorage(tmp_path)
        with pytest.raises(StorageError, match="Cannot read"):
            storage.load_items()

    def test_bad_record_raises_storage_error(self, tmp_path):
        (tmp_path / "items.json").write_text('[{"name": "gauze", "quantity": -1}]')
        with pytest.raises(StorageError, match="Corrupt item record"):
            JsonStorage(tmp_path).load_items()


class TestJsonStorageOrders:

    def _order(self) -> Order:
        order = Order.create(OrderType.DISPENSE, notes="ward 3")
        order.add_item("tape", 2)
        order.add_item("gauze", 1)
        return order

    def test_order_round_trips_exactly(self, tmp_path):
        order = self._order()
        order.fulfill()
        JsonStorage(tmp_path).save_order(order)

        loaded = JsonStorage(tmp_path).get_order(order.id)

        assert loaded == order
        assert loaded is not order

    def test_pending_order_has_no_fulfilment_time(self, tmp_path):
        order = self._order()
        JsonStorage(tmp_path).save_order(order)
        raw = json.loads((tmp_path / "orders.json").read_text())
        assert raw[0]["fulfilled_at"] is None
        assert raw[0]["status"] == "PENDING"
        assert raw[0]["id"] == str(order.id)

    def test_save_order_upserts(self, tmp_path):
        storage = JsonStorage(tmp_path)
        order = self._order()
        storage.save_order(order)
        order.cancel()
        storage.save_order(order)

        orders = storage.list_orders()
        assert len(orders) == 1
        assert orders[0].status == OrderStatus.CANCELLED

    def test_save_order_writes_items_too(self, tmp_path):
        storage = JsonStorage(tmp_path)
        storage.save_item(Item("tape", 2))
        order = self._order()

        storage.save_order(order, items=[Item("tape", 0), Item("gauze", 7)])

        assert storage.load_items() == [Item("gauze", 7)]
        assert storage.get_order(order.id) is not None

    def test_unknown_order_is_none(self, tmp_path):
        assert JsonStorage(tmp_path).get_order(self._order().id) is None

    def test_failed_order_write_restores_items(self, tmp_path, monkeypatch):
        storage = JsonStorage(tmp_path)
        storage.save_item(Item("tape", 2))
        original = JsonStorage._persist_raw

        def persist(path, records):
            if path.name == "orders.json":
                raise StorageError("disk full")
            original(path, records)

        monkeypatch.setattr(JsonStorage, "_persist_raw", staticmethod(persist))

        with pytest.raises(StorageError):
            storage.save_order(self._order(), items=[Item("tape", 9)])

        assert storage.load_items() == [Item("tape", 2)]
        assert storage.list_orders() == []


class TestJsonStorageCorruptRecords:

    def test_get_order_with_record_missing_id(self, tmp_path):
        (tmp_path / "orders.json").write_text('[{"type": "PURCHASE"}]')
        with pytest.raises(StorageError, match="Corrupt record"):
            JsonStorage(tmp_path).get_order(uuid.uuid4())

    def test_save_order_with_non_dict_record(self, tmp_path):
        (tmp_path / "orders.json").write_text('["not-an-order"]')
        order = Order.create(OrderType.PURCHASE)
        order.add_item("tape", 1)
        with pytest.raises(StorageError, match="Corrupt record"):
            JsonStorage(tmp_path).save_order(order)

    def test_save_item_with_record_missing_name(self, tmp_path):
        (tmp_path / "items.json").write_text('[{"qty": 1}]')
        with pytest.raises(StorageError, match="Corrupt record"):
            JsonStorage(tmp_path).save_item(Item("tape", 1))
        assert json.loads((tmp_path / "items.json").read_text()) == [{"qty": 1}]

    def test_list_orders_with_non_dict_record(self, tmp_path):
        (tmp_path / "orders.json").write_text("[42]")
        with pytest.raises(StorageError, match="Corrupt order record"):
            JsonStorage(tmp_path).list_orders()

    def test_unwritable_data_dir(self, tmp_path):
        blocker = tmp_path / "taken"
        blocker.write_text("a file, not a directory")
        with pytest.raises(StorageError, match="Cannot create"):
            JsonStorage(blocker / "data")
