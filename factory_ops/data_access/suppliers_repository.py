# factory_ops/data_access/suppliers_repository.py

import logging

from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.business_logic.entities.supplier_entity import SupplierEntity
from factory_ops.constants import Collection

logger = logging.getLogger(__name__)

class SuppliersRepository(BaseRepository[SupplierEntity]):
    def __init__(self, store):
        super().__init__(store=store,
                         model_type=SupplierEntity,
                         collection_key=Collection.SUPPLIERS.value)
