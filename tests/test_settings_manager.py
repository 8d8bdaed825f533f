# tests/test_settings_manager.py

import json
from decimal import Decimal

import pytest

from factory_ops.constants import Collection, DEFAULT_SHIFTS, MACHINE_IDLE


def test_reads_seeded_settings(settings_manager):
    assert settings_manager.get_shifts() == DEFAULT_SHIFTS
    assert settings_manager.get_low_stock_threshold() == Decimal("1000")
    assert settings_manager.get_production_steps()[0] == "รอฉีด"
    assert settings_manager.get_company_info()["name"] == "CT Electric Co., Ltd."
    assert settings_manager.get_language("en") == "en"


def test_production_config_is_merged_and_validated(settings_manager):
    merged = settings_manager.update_production_config({"lowStockThreshold": 200})

    assert merged["lowStockThreshold"] == 200
    assert merged["workingHoursPerDay"] == 8
    with pytest.raises(ValueError):
        settings_manager.update_production_config({"lowStockThreshold": "many"})
    with pytest.raises(ValueError):
        settings_manager.update_production_config({"shifts": []})


def test_list_settings(settings_manager):
    assert settings_manager.update_list_setting("qcRejectReasons", ["  Flash ", "", "Short shot"]) == ["Flash", "Short shot"]
    with pytest.raises(ValueError):
        settings_manager.update_list_setting("machineStatuses", [])
    with pytest.raises(ValueError):
        settings_manager.update_list_setting("colors", ["red"])


def test_export_then_import_restores_data(settings_manager, store):
    backup = settings_manager.export_json()
    store.replace_collection(Collection.PRODUCTS.value, [])

    settings_manager.import_json(backup)

    assert len(store.get_collection(Collection.PRODUCTS.value)) == 1


def test_import_rejects_foreign_files(settings_manager):
    with pytest.raises(ValueError):
        settings_manager.import_json("not json")
    with pytest.raises(ValueError):
        settings_manager.import_json(json.dumps({"hello": "world"}))


def test_collection_csv_has_union_of_columns(settings_manager, store):
    store.replace_collection(Collection.CUSTOMERS.value, [
        {"id": "c1", "name": "ACME"},
        {"id": "c2", "name": "Beta", "phone": "02-000", "tags": ["vip"]},
    ])

    lines = settings_manager.export_collection_csv(Collection.CUSTOMERS.value).splitlines()

    assert lines[0] == "id,name,phone,tags"
    assert lines[1] == "c1,ACME,,"
    assert lines[2] == 'c2,Beta,02-000,"[""vip""]"'
    assert settings_manager.export_collection_csv(Collection.SUPPLIERS.value) == ""


def test_reset_selected_parts(settings_manager, store):
    store.replace_collection(Collection.MACHINES.value, [{"id": "m1", "name": "M1", "status": "ทำงาน"}])

    applied = settings_manager.reset({"orders": True, "materials": True, "machines": True, "qc": False})

    assert applied == ["orders", "materials", "machines"]
    assert store.get_collection(Collection.PACKING_ORDERS.value) == []
    assert all(row["quantity"] == 0 for row in store.get_collection(Collection.RAW_MATERIALS.value))
    assert store.get_collection(Collection.MACHINES.value)[0]["status"] == MACHINE_IDLE
    assert store.get_collection(Collection.MOLDING_LOGS.value)


def test_reset_needs_a_known_selection(settings_manager):
    with pytest.raises(ValueError):
        settings_manager.reset({})
    with pytest.raises(ValueError):
        settings_manager.reset({"everything": True})
