# factory_ops/business_logic/inventory_manager.py

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from factory_ops.business_logic.entities.inventory_item_entity import InventoryItemEntity
from factory_ops.business_logic.settings_manager import SettingsManager
from factory_ops.constants import Collection, ISOStatus, InventoryCategory, InventorySource, DEFAULT_PIECE_UNIT
from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.data_access.finished_goods_repository import FinishedGoodsRepository
from factory_ops.data_access.raw_materials_repository import RawMaterialsRepository

logger = logging.getLogger(__name__)


class InventoryManager:
    """Raw materials, produced components and finished goods."""

    def __init__(self, raw_materials_repository: RawMaterialsRepository,
                 finished_goods_repository: FinishedGoodsRepository,
                 settings_manager: SettingsManager):
        if raw_materials_repository is None: raise ValueError("raw_materials_repository cannot be None")
        if finished_goods_repository is None: raise ValueError("finished_goods_repository cannot be None")
        if settings_manager is None: raise ValueError("settings_manager cannot be None")
        self.raw_material_repo = raw_materials_repository
        self.finished_goods_repo = finished_goods_repository
        self.settings_manager = settings_manager

    def _repo_for(self, collection_key: str) -> BaseRepository:
        if collection_key == Collection.RAW_MATERIALS.value:
            return self.raw_material_repo
        if collection_key == Collection.FINISHED_GOODS.value:
            return self.finished_goods_repo
        raise ValueError(f"'{collection_key}' is not an inventory collection.")

    def _get_item(self, collection_key: str, item_id: str) -> InventoryItemEntity:
        item = self._repo_for(collection_key).get_by_id(item_id)
        if not item:
            raise ValueError(f"Inventory item with ID {item_id} not found.")
        return item

    # --- listing ---

    def get_raw_materials(self) -> List[InventoryItemEntity]:
        return self.raw_material_repo.get_materials()

    def get_components(self) -> List[InventoryItemEntity]:
        return self.raw_material_repo.get_components()

    def get_finished_goods(self) -> List[InventoryItemEntity]:
        return self.finished_goods_repo.get_all()

    def get_all_items(self) -> List[InventoryItemEntity]:
        return self.raw_material_repo.get_all() + self.finished_goods_repo.get_all()

    def search(self, collection_key: str, text: str) -> List[InventoryItemEntity]:
        repo = self._repo_for(collection_key)
        if not text or not text.strip():
            return repo.get_all()
        return repo.find_by_criteria({"name": ("LIKE", text.strip())})

    def get_low_stock_items(self) -> List[InventoryItemEntity]:
        threshold = self.settings_manager.get_low_stock_threshold()
        low = [item for item in self.get_all_items() if item.quantity < threshold]
        logger.debug(f"{len(low)} items below low stock threshold {threshold}.")
        return low

    def inventory_value(self, collection_key: Optional[str] = None) -> Decimal:
        items = self._repo_for(collection_key).get_all() if collection_key else self.get_all_items()
        return sum((item.quantity * (item.cost_per_unit or Decimal("0")) for item in items), Decimal("0"))

    # --- editing ---

    def add_item(self, collection_key: str, name: str, quantity: Decimal = Decimal("0"),
                 unit: Optional[str] = None, **other_fields: Any) -> InventoryItemEntity:
        logger.info(f"Adding inventory item '{name}' to {collection_key}")
        if not name or not name.strip():
            raise ValueError("Item name cannot be empty.")
        quantity = Decimal(str(quantity))
        if quantity < 0:
            raise ValueError("Quantity cannot be negative.")
        if collection_key == Collection.FINISHED_GOODS.value:
            other_fields.setdefault("category", InventoryCategory.FINISHED.value)
            other_fields.setdefault("source", InventorySource.PRODUCED.value)
            unit = unit or DEFAULT_PIECE_UNIT
        else:
            other_fields.setdefault("category", InventoryCategory.MATERIAL.value)
            other_fields.setdefault("source", InventorySource.PURCHASED.value)
        item = InventoryItemEntity(name=name.strip(), quantity=quantity, **other_fields)
        if unit:
            item.unit = unit
        return self._repo_for(collection_key).add(item)

    def update_item(self, collection_key: str, item_id: str, update_data: Dict[str, Any]) -> InventoryItemEntity:
        logger.info(f"Updating inventory item {item_id} in {collection_key}: {update_data}")
        item = self._get_item(collection_key, item_id)
        for key, value in update_data.items():
            if key == "id":
                continue
            if not hasattr(item, key):
                raise ValueError(f"Unknown inventory field '{key}'.")
            if key in ("quantity", "cost_per_unit", "reserved_quantity") and value is not None:
                try:
                    value = Decimal(str(value))
                except InvalidOperation:
                    raise ValueError(f"'{value}' is not a valid number for {key}.")
                if value < 0:
                    raise ValueError(f"{key} cannot be negative.")
            if key == "iso_status" and value is not None and not isinstance(value, ISOStatus):
                value = ISOStatus(value)
            setattr(item, key, value)
        updated = self._repo_for(collection_key).update(item)
        if not updated:
            raise ValueError(f"Inventory item {item_id} could not be updated.")
        return updated

    def delete_item(self, collection_key: str, item_id: str) -> bool:
        return self._repo_for(collection_key).delete(item_id)

    def adjust_stock(self, collection_key: str, item_id: str, delta: Decimal) -> InventoryItemEntity:
        """Adds delta to the quantity. Deductions stop at zero."""
        item = self._get_item(collection_key, item_id)
        delta = Decimal(str(delta))
        new_quantity = item.quantity + delta
        if new_quantity < 0:
            logger.warning(f"Stock of '{item.name}' would go below zero ({new_quantity}); clamped to 0.")
            new_quantity = Decimal("0")
        item.quantity = new_quantity
        logger.info(f"Stock of '{item.name}' adjusted by {delta} to {item.quantity}.")
        return self._repo_for(collection_key).update(item)

    def set_iso_status(self, collection_key: str, item_id: str, status: ISOStatus) -> InventoryItemEntity:
        return self.update_item(collection_key, item_id, {"iso_status": status})

    def move_to_location(self, collection_key: str, item_id: str, location_id: Optional[str]) -> InventoryItemEntity:
        return self.update_item(collection_key, item_id, {"location_id": location_id})
