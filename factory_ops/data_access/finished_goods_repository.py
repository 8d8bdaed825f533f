# factory_ops/data_access/finished_goods_repository.py

from typing import Optional
import logging

from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.business_logic.entities.inventory_item_entity import InventoryItemEntity
from factory_ops.constants import Collection

logger = logging.getLogger(__name__)

class FinishedGoodsRepository(BaseRepository[InventoryItemEntity]):
    def __init__(self, store):
        super().__init__(store=store,
                         model_type=InventoryItemEntity,
                         collection_key=Collection.FINISHED_GOODS.value)

    def get_by_exact_name(self, name: str) -> Optional[InventoryItemEntity]:
        for item in self.get_all():
            if item.name == name:
                return item
        return None
