# tests/test_document_gateway.py

import json
from datetime import date
from decimal import Decimal

import pytest

from factory_ops.constants import Collection, PurchaseOrderStatus
from factory_ops.data_access import DatabaseManager, FactoryDocumentGateway, StoreUnavailableError, sanitize_data


def test_sanitize_converts_values_to_plain_json():
    data = {
        "when": date(2025, 5, 15),
        "price": Decimal("45.5"),
        "status": PurchaseOrderStatus.RECEIVED,
        "bad_float": float("inf"),
        "bad_decimal": Decimal("NaN"),
        "thing": object(),
        "nested": [1, "two", None, True, (3, 4)],
    }

    clean = sanitize_data(data)

    assert clean == {
        "when": "2025-05-15",
        "price": 45.5,
        "status": "Received",
        "bad_float": None,
        "bad_decimal": None,
        "thing": None,
        "nested": [1, "two", None, True, [3, 4]],
    }
    json.dumps(clean, allow_nan=False)


def test_sanitize_drops_private_keys_and_breaks_cycles():
    node = {"name": "a", "_cache": 1, "$meta": 2}
    node["self"] = node

    clean = sanitize_data(node)

    assert clean == {"name": "a", "self": None}


def test_sanitize_keeps_shared_non_cyclic_references():
    shared = {"x": 1}

    assert sanitize_data({"a": shared, "b": shared}) == {"a": {"x": 1}, "b": {"x": 1}}


def test_empty_store_returns_default_document(gateway):
    gateway.initialize()

    data = gateway.fetch_factory_data()

    assert Collection.PRODUCTS.value in data
    assert data[Collection.PRODUCTION_DOCUMENTS.value] == []


def test_saved_document_is_read_back(gateway):
    gateway.initialize()
    gateway.save_factory_data({"packing_orders": [], "note": Decimal("1.5")})

    assert gateway.fetch_factory_data() == {"packing_orders": [], "note": 1.5}
    assert gateway.last_updated() is not None


def test_corrupt_payload_raises(db_manager, gateway):
    gateway.initialize()
    db_manager.set_document(gateway.collection, gateway.doc_id, "{not json", "2025-01-01T00:00:00")

    with pytest.raises(StoreUnavailableError):
        gateway.fetch_factory_data()


def test_unreachable_database_raises(tmp_path):
    gateway = FactoryDocumentGateway(DatabaseManager(str(tmp_path / "missing" / "factory.db")))

    with pytest.raises(StoreUnavailableError):
        gateway.initialize()
    with pytest.raises(StoreUnavailableError):
        gateway.fetch_factory_data()
    with pytest.raises(StoreUnavailableError):
        gateway.save_factory_data({})


def test_database_manager_replaces_a_document_in_place(db_manager):
    db_manager.create_tables()
    db_manager.set_document("factory", "main_data", '{"a": 1}', "2025-01-01T00:00:00")
    db_manager.set_document("factory", "main_data", '{"a": 2}', "2025-01-02T00:00:00")

    assert db_manager.get_document("factory", "main_data") == '{"a": 2}'
    assert db_manager.get_document("factory", "other") is None
    assert not hasattr(db_manager, "fetch_all")
