# tests/test_inventory_manager.py

from decimal import Decimal

import pytest

from conftest import ABS_ID, WHITE_ID
from factory_ops.business_logic.inventory_manager import InventoryManager
from factory_ops.constants import Collection, ISOStatus, InventoryCategory

RAW = Collection.RAW_MATERIALS.value
FINISHED = Collection.FINISHED_GOODS.value


@pytest.fixture
def inventory_manager(repos, settings_manager):
    return InventoryManager(repos.raw_materials, repos.finished_goods, settings_manager)


def test_low_stock_uses_configured_threshold(inventory_manager, settings_manager):
    # seed: ABS 1000, White 50, finished goods 0; threshold 1000
    low = {item.id for item in inventory_manager.get_low_stock_items()}
    assert ABS_ID not in low
    assert WHITE_ID in low

    settings_manager.update_production_config({"lowStockThreshold": 10})
    assert WHITE_ID not in {item.id for item in inventory_manager.get_low_stock_items()}


def test_add_item_sets_category_by_collection(inventory_manager):
    finished = inventory_manager.add_item(FINISHED, "Socket")
    raw = inventory_manager.add_item(RAW, "PP resin", Decimal("25"), unit="kg")

    assert finished.category == InventoryCategory.FINISHED.value
    assert finished.unit == "pcs"
    assert raw.category == InventoryCategory.MATERIAL.value
    with pytest.raises(ValueError):
        inventory_manager.add_item(RAW, " ")
    with pytest.raises(ValueError):
        inventory_manager.add_item("machines", "x")


def test_adjust_stock_clamps_at_zero(inventory_manager, repos):
    inventory_manager.adjust_stock(RAW, WHITE_ID, Decimal("-20"))
    assert repos.raw_materials.get_by_id(WHITE_ID).quantity == Decimal("30")

    inventory_manager.adjust_stock(RAW, WHITE_ID, Decimal("-500"))
    assert repos.raw_materials.get_by_id(WHITE_ID).quantity == Decimal("0")


def test_update_item_validates_fields(inventory_manager, repos):
    inventory_manager.set_iso_status(RAW, ABS_ID, ISOStatus.HOLD)
    assert repos.raw_materials.get_by_id(ABS_ID).iso_status == ISOStatus.HOLD

    with pytest.raises(ValueError):
        inventory_manager.update_item(RAW, ABS_ID, {"quantity": "-1"})
    with pytest.raises(ValueError):
        inventory_manager.update_item(RAW, ABS_ID, {"colour": "red"})


def test_inventory_value(inventory_manager):
    assert inventory_manager.inventory_value(RAW) == Decimal("1000") * Decimal("45.5") + Decimal("50") * Decimal("120")


def test_search_by_name(inventory_manager):
    assert [i.id for i in inventory_manager.search(RAW, "abs")] == [ABS_ID]
    assert len(inventory_manager.search(RAW, "")) == 2
