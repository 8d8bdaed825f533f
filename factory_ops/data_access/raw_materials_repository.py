# factory_ops/data_access/raw_materials_repository.py

from typing import List, Optional
import logging

from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.business_logic.entities.inventory_item_entity import InventoryItemEntity
from factory_ops.constants import Collection, InventoryCategory

logger = logging.getLogger(__name__)

class RawMaterialsRepository(BaseRepository[InventoryItemEntity]):
    """Purchased materials and produced components share this collection."""

    def __init__(self, store):
        super().__init__(store=store,
                         model_type=InventoryItemEntity,
                         collection_key=Collection.RAW_MATERIALS.value)

    def get_by_exact_name(self, name: str) -> Optional[InventoryItemEntity]:
        for item in self.get_all():
            if item.name == name:
                return item
        return None

    def get_components(self) -> List[InventoryItemEntity]:
        return self.find_by_criteria({"category": InventoryCategory.COMPONENT.value})

    def get_materials(self) -> List[InventoryItemEntity]:
        # rows saved before categories existed count as materials
        return [i for i in self.get_all() if i.category != InventoryCategory.COMPONENT.value]
