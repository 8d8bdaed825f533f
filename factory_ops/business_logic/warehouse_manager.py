# factory_ops/business_logic/warehouse_manager.py

import logging
from decimal import Decimal
from typing import Any, Dict, List

from factory_ops.business_logic.entities.inventory_item_entity import InventoryItemEntity
from factory_ops.business_logic.entities.warehouse_location_entity import WarehouseLocationEntity
from factory_ops.constants import DEFAULT_LOCATION_CAPACITY, LocationType, Priority
from factory_ops.data_access.finished_goods_repository import FinishedGoodsRepository
from factory_ops.data_access.raw_materials_repository import RawMaterialsRepository
from factory_ops.data_access.warehouse_locations_repository import WarehouseLocationsRepository

logger = logging.getLogger(__name__)


class WarehouseManager:
    def __init__(self, locations_repository: WarehouseLocationsRepository,
                 raw_materials_repository: RawMaterialsRepository,
                 finished_goods_repository: FinishedGoodsRepository):
        if locations_repository is None: raise ValueError("locations_repository cannot be None")
        if raw_materials_repository is None: raise ValueError("raw_materials_repository cannot be None")
        if finished_goods_repository is None: raise ValueError("finished_goods_repository cannot be None")
        self.locations_repo = locations_repository
        self.raw_material_repo = raw_materials_repository
        self.finished_goods_repo = finished_goods_repository

    def get_locations(self, zone: str = None) -> List[WarehouseLocationEntity]:
        if zone:
            return self.locations_repo.get_by_zone(zone)
        return self.locations_repo.get_all()

    def add_location(self, zone: str) -> WarehouseLocationEntity:
        if not zone or not zone.strip():
            raise ValueError("Zone cannot be empty.")
        zone = zone.strip()
        count_in_zone = len(self.locations_repo.get_by_zone(zone))
        location = WarehouseLocationEntity(
            name=f"{zone[0]}-{count_in_zone + 1}".upper(),
            zone=zone,
            type=LocationType.RACK,
            capacity=DEFAULT_LOCATION_CAPACITY,
            description="New Rack",
            tags=[],
            priority=Priority.MEDIUM,
        )
        logger.info(f"Adding warehouse location {location.name} in zone {zone}")
        return self.locations_repo.add(location)

    def update_location(self, location_id: str, update_data: Dict[str, Any]) -> WarehouseLocationEntity:
        location = self.locations_repo.get_by_id(location_id)
        if not location:
            raise ValueError(f"Warehouse location with ID {location_id} not found.")
        for key, value in update_data.items():
            if key == "id":
                continue
            if not hasattr(location, key):
                raise ValueError(f"Unknown location field '{key}'.")
            if key == "capacity":
                value = Decimal(str(value))
                if value < 0:
                    raise ValueError("Capacity cannot be negative.")
            elif key == "type" and not isinstance(value, LocationType):
                value = LocationType(value)
            elif key == "priority" and value is not None and not isinstance(value, Priority):
                value = Priority(value)
            setattr(location, key, value)
        return self.locations_repo.update(location)

    def delete_location(self, location_id: str) -> bool:
        # items keep their locationId and show as unplaced
        return self.locations_repo.delete(location_id)

    def get_items_in_location(self, location_id: str) -> List[InventoryItemEntity]:
        items = self.finished_goods_repo.get_all() + self.raw_material_repo.get_all()
        return [item for item in items if item.location_id == location_id]

    def get_usage_percentage(self, location: WarehouseLocationEntity) -> Decimal:
        if not location.capacity:
            return Decimal("0")
        total_quantity = sum((i.quantity for i in self.get_items_in_location(location.id)), Decimal("0"))
        return min(total_quantity / location.capacity * 100, Decimal("100"))

    def zone_stats(self) -> Dict[str, Any]:
        raw_materials = self.raw_material_repo.get_all()
        return {
            "raw_items": len(raw_materials),
            "raw_value": sum((m.quantity * (m.cost_per_unit or Decimal("0")) for m in raw_materials), Decimal("0")),
            "finished_items": len(self.finished_goods_repo.get_all()),
        }
