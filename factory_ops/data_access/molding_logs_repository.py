# factory_ops/data_access/molding_logs_repository.py

from typing import List
from datetime import date
import logging

from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.business_logic.entities.molding_log_entity import MoldingLogEntity
from factory_ops.constants import Collection

logger = logging.getLogger(__name__)

class MoldingLogsRepository(BaseRepository[MoldingLogEntity]):
    def __init__(self, store):
        super().__init__(store=store,
                         model_type=MoldingLogEntity,
                         collection_key=Collection.MOLDING_LOGS.value)

    def get_by_order_id(self, order_id: str) -> List[MoldingLogEntity]:
        return self.find_by_criteria({"order_id": order_id})

    def get_by_status(self, status: str) -> List[MoldingLogEntity]:
        return self.find_by_criteria({"status": status})

    def get_by_date(self, log_date: date) -> List[MoldingLogEntity]:
        return self.find_by_criteria({"date": log_date})
