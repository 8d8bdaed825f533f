# factory_ops/data_access/quotations_repository.py

from typing import List
import logging

from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.business_logic.entities.quotation_entity import QuotationEntity
from factory_ops.constants import Collection

logger = logging.getLogger(__name__)

class QuotationsRepository(BaseRepository[QuotationEntity]):
    def __init__(self, store):
        super().__init__(store=store,
                         model_type=QuotationEntity,
                         collection_key=Collection.QUOTATIONS.value)

    def get_by_material(self, raw_material_id: str) -> List[QuotationEntity]:
        return self.find_by_criteria({"raw_material_id": raw_material_id})
