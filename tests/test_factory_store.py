# tests/test_factory_store.py

import pytest

from factory_ops.business_logic.factory_store import FactoryStore, SAVED_LOCALLY_MESSAGE
from factory_ops.constants import Collection
from factory_ops.data_access import DatabaseManager, FactoryDocumentGateway


@pytest.fixture
def offline_store(tmp_path):
    gateway = FactoryDocumentGateway(DatabaseManager(str(tmp_path / "missing" / "factory.db")))
    return FactoryStore(gateway)


def test_load_falls_back_to_defaults_when_offline(offline_store):
    data = offline_store.load()

    assert offline_store.is_loaded
    assert offline_store.is_offline
    assert offline_store.last_error
    assert Collection.PRODUCTS.value in data


def test_failed_save_keeps_new_state_in_memory(offline_store):
    offline_store.load()

    offline_store.replace_collection(Collection.CUSTOMERS.value, [{"id": "c1", "name": "ACME"}])

    assert offline_store.get_collection(Collection.CUSTOMERS.value) == [{"id": "c1", "name": "ACME"}]
    assert offline_store.last_error == SAVED_LOCALLY_MESSAGE


def test_updates_persist_across_store_instances(gateway, store):
    store.replace_collection(Collection.CUSTOMERS.value, [{"id": "c1", "name": "ACME"}])

    reloaded = FactoryStore(gateway)
    reloaded.load()

    assert not reloaded.is_offline
    assert reloaded.get_collection(Collection.CUSTOMERS.value) == [{"id": "c1", "name": "ACME"}]


def test_update_collections_writes_every_key_at_once(store):
    store.update_collections({
        Collection.CUSTOMERS.value: [{"id": "c1", "name": "A"}],
        Collection.SUPPLIERS.value: [{"id": "s1", "name": "B"}],
    })

    assert store.get_collection(Collection.CUSTOMERS.value)[0]["name"] == "A"
    assert store.get_collection(Collection.SUPPLIERS.value)[0]["name"] == "B"
    assert store.get_collection(Collection.PRODUCTS.value)


def test_snapshots_are_detached(store):
    rows = store.get_collection(Collection.PRODUCTS.value)
    rows.clear()
    snapshot = store.data
    snapshot[Collection.PRODUCTS.value] = []

    assert store.get_collection(Collection.PRODUCTS.value)


def test_subscribers_are_notified_until_unsubscribed(store):
    calls = []
    unsubscribe = store.subscribe(calls.append)

    store.replace_collection(Collection.CUSTOMERS.value, [])
    unsubscribe()
    store.replace_collection(Collection.CUSTOMERS.value, [])

    assert len(calls) == 1
    assert Collection.CUSTOMERS.value in calls[0]


def test_non_list_collection_reads_as_empty(store):
    store.update_collections({Collection.CUSTOMERS.value: "broken"})

    assert store.get_collection(Collection.CUSTOMERS.value) == []


def test_reset_data_restores_seed(store):
    store.replace_collection(Collection.PRODUCTS.value, [])

    store.reset_data()

    assert len(store.get_collection(Collection.PRODUCTS.value)) == 1
