# factory_ops/data_access/maintenance_logs_repository.py

from typing import List
import logging

from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.business_logic.entities.maintenance_log_entity import MaintenanceLogEntity
from factory_ops.constants import Collection

logger = logging.getLogger(__name__)

class MaintenanceLogsRepository(BaseRepository[MaintenanceLogEntity]):
    def __init__(self, store):
        super().__init__(store=store,
                         model_type=MaintenanceLogEntity,
                         collection_key=Collection.MAINTENANCE_LOGS.value)

    def get_by_machine_id(self, machine_id: str) -> List[MaintenanceLogEntity]:
        return self.find_by_criteria({"machine_id": machine_id})
