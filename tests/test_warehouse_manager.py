# tests/test_warehouse_manager.py

from decimal import Decimal

import pytest

from conftest import ABS_ID
from factory_ops.business_logic.warehouse_manager import WarehouseManager
from factory_ops.constants import LocationType, Priority


@pytest.fixture
def warehouse_manager(repos):
    return WarehouseManager(repos.locations, repos.raw_materials, repos.finished_goods)


def test_new_locations_are_numbered_per_zone(warehouse_manager):
    first = warehouse_manager.add_location("a")
    second = warehouse_manager.add_location("a")
    other = warehouse_manager.add_location("b")

    assert (first.name, second.name, other.name) == ("A-1", "A-2", "B-1")
    assert first.type == LocationType.RACK
    assert first.priority == Priority.MEDIUM
    assert first.capacity == Decimal("1000")
    assert len(warehouse_manager.get_locations("a")) == 2


def test_usage_is_capped_at_full(warehouse_manager, repos):
    location = warehouse_manager.add_location("A")
    material = repos.raw_materials.get_by_id(ABS_ID)
    material.location_id = location.id
    repos.raw_materials.update(material)

    assert [i.id for i in warehouse_manager.get_items_in_location(location.id)] == [ABS_ID]
    assert warehouse_manager.get_usage_percentage(location) == Decimal("100")

    location = warehouse_manager.update_location(location.id, {"capacity": "4000"})
    assert warehouse_manager.get_usage_percentage(location) == Decimal("25")


def test_zero_capacity_reads_as_empty(warehouse_manager):
    location = warehouse_manager.add_location("C")
    location = warehouse_manager.update_location(location.id, {"capacity": 0})

    assert warehouse_manager.get_usage_percentage(location) == Decimal("0")


def test_update_rejects_bad_values(warehouse_manager):
    location = warehouse_manager.add_location("D")

    with pytest.raises(ValueError):
        warehouse_manager.update_location(location.id, {"capacity": "-5"})
    with pytest.raises(ValueError):
        warehouse_manager.update_location(location.id, {"type": "Tunnel"})
    with pytest.raises(ValueError):
        warehouse_manager.add_location("  ")
