# factory_ops/data_access/products_repository.py

from typing import List, Optional
import logging

from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.business_logic.entities.product_entity import ProductEntity
from factory_ops.constants import Collection

logger = logging.getLogger(__name__)

class ProductsRepository(BaseRepository[ProductEntity]):
    def __init__(self, store):
        super().__init__(store=store,
                         model_type=ProductEntity,
                         collection_key=Collection.PRODUCTS.value)

    def get_by_exact_name(self, name: str) -> Optional[ProductEntity]:
        """Case-sensitive, first match wins."""
        for product in self.get_all():
            if product.name == name:
                return product
        return None

    def search_by_name(self, name_query: str) -> List[ProductEntity]:
        return self.find_by_criteria({"name": ("LIKE", name_query)})

    def get_by_created_material(self, material_id: str) -> Optional[ProductEntity]:
        for product in self.get_all():
            if product.creates_raw_material_id == material_id:
                return product
        return None
