# factory_ops/data_access/customers_repository.py

import logging

from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.business_logic.entities.customer_entity import CustomerEntity
from factory_ops.constants import Collection

logger = logging.getLogger(__name__)

class CustomersRepository(BaseRepository[CustomerEntity]):
    def __init__(self, store):
        super().__init__(store=store,
                         model_type=CustomerEntity,
                         collection_key=Collection.CUSTOMERS.value)
