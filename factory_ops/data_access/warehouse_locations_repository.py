# factory_ops/data_access/warehouse_locations_repository.py

from typing import List
import logging

from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.business_logic.entities.warehouse_location_entity import WarehouseLocationEntity
from factory_ops.constants import Collection

logger = logging.getLogger(__name__)

class WarehouseLocationsRepository(BaseRepository[WarehouseLocationEntity]):
    def __init__(self, store):
        super().__init__(store=store,
                         model_type=WarehouseLocationEntity,
                         collection_key=Collection.WAREHOUSE_LOCATIONS.value)

    def get_by_zone(self, zone: str) -> List[WarehouseLocationEntity]:
        return self.find_by_criteria({"zone": zone})
