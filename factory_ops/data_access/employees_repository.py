# factory_ops/data_access/employees_repository.py

from typing import List
import logging

from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.business_logic.entities.employee_entity import EmployeeEntity
from factory_ops.constants import Collection

logger = logging.getLogger(__name__)

class EmployeesRepository(BaseRepository[EmployeeEntity]):
    def __init__(self, store):
        super().__init__(store=store,
                         model_type=EmployeeEntity,
                         collection_key=Collection.EMPLOYEES.value)

    def get_active(self) -> List[EmployeeEntity]:
        return self.find_by_criteria({"status": "Active"})
