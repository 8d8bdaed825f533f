# factory_ops/data_access/machines_repository.py

from typing import Optional
import logging

from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.business_logic.entities.machine_entity import MachineEntity
from factory_ops.constants import Collection

logger = logging.getLogger(__name__)

class MachinesRepository(BaseRepository[MachineEntity]):
    def __init__(self, store):
        super().__init__(store=store,
                         model_type=MachineEntity,
                         collection_key=Collection.MACHINES.value)

    def get_by_name(self, name: str) -> Optional[MachineEntity]:
        found = self.find_by_criteria({"name": name})
        return found[0] if found else None
