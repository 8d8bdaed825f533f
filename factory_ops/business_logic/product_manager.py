# factory_ops/business_logic/product_manager.py
from typing import Optional, List, Any, Dict, TYPE_CHECKING
from decimal import Decimal, InvalidOperation

from factory_ops.business_logic.entities.product_entity import ProductEntity
from factory_ops.business_logic.material_requirements import resolve_product

if TYPE_CHECKING:
    from ..data_access.products_repository import ProductsRepository

import logging

logger = logging.getLogger(__name__)

class ProductManager:
    def __init__(self, product_repository: 'ProductsRepository'):
        if product_repository is None:
            raise ValueError("product_repository cannot be None")
        self.product_repo = product_repository

    def get_product_by_id(self, product_id: str) -> Optional[ProductEntity]:
        logger.debug(f"Fetching product by ID: {product_id}")
        product = self.product_repo.get_by_id(product_id)
        if not product:
            logger.warning(f"Product with ID {product_id} not found.")
            return None
        return product

    def get_product_by_name(self, name: str) -> Optional[ProductEntity]:
        if not name:
            return None
        return self.product_repo.get_by_exact_name(name)

    def get_all_products(self) -> List[ProductEntity]:
        return sorted(self.product_repo.get_all(), key=lambda p: p.name)

    def search_products(self, text: str) -> List[ProductEntity]:
        if not text or not text.strip():
            return self.get_all_products()
        return self.product_repo.search_by_name(text.strip())

    def resolve(self, product_name: Optional[str], product_id: Optional[str] = None) -> Optional[ProductEntity]:
        """Same name-then-id lookup the requirement calculation uses."""
        return resolve_product(product_name, product_id, self.product_repo.get_all())

    def _validate_product_data(self, name: str, cycle_time_seconds: Any, sale_price: Any,
                               product_id_to_exclude: Optional[str] = None):
        if not name or not name.strip():
            raise ValueError("Product name cannot be empty.")
        existing = self.product_repo.get_by_exact_name(name.strip())
        if existing and existing.id != product_id_to_exclude:
            raise ValueError(f"A product named '{name.strip()}' already exists.")
        for label, value in (("Cycle time", cycle_time_seconds), ("Sale price", sale_price)):
            try:
                if Decimal(str(value)) < 0:
                    raise ValueError(f"{label} cannot be negative.")
            except InvalidOperation:
                raise ValueError(f"{label} is not a valid number: '{value}'.")

    def create_product(self, name: str, cycle_time_seconds: Decimal = Decimal("0"),
                       sale_price: Decimal = Decimal("0"), **other_fields: Any) -> ProductEntity:
        logger.info(f"Attempting to create product: {name}")
        self._validate_product_data(name, cycle_time_seconds, sale_price)
        product = ProductEntity(
            name=name.strip(),
            cycle_time_seconds=Decimal(str(cycle_time_seconds)),
            sale_price=Decimal(str(sale_price)),
            **other_fields,
        )
        created = self.product_repo.add(product)
        logger.info(f"Product '{created.name}' created with ID {created.id}.")
        return created

    def update_product(self, product_id: str, update_data: Dict[str, Any]) -> ProductEntity:
        logger.info(f"Attempting to update product ID {product_id} with data: {update_data}")
        product = self.product_repo.get_by_id(product_id)
        if not product:
            raise ValueError(f"Product with ID {product_id} not found.")

        self._validate_product_data(
            update_data.get("name", product.name),
            update_data.get("cycle_time_seconds", product.cycle_time_seconds),
            update_data.get("sale_price", product.sale_price),
            product_id_to_exclude=product_id,
        )
        for key, value in update_data.items():
            if key in ("id", "bom"):
                continue  # BOM is edited through BomManager
            if not hasattr(product, key):
                raise ValueError(f"Unknown product field '{key}'.")
            if key in ("cycle_time_seconds", "sale_price", "min_tonnage") and value is not None:
                value = Decimal(str(value))
            if key == "name":
                value = value.strip()
            setattr(product, key, value)

        updated = self.product_repo.update(product)
        if not updated:
            raise ValueError(f"Product with ID {product_id} could not be updated.")
        return updated

    def delete_product(self, product_id: str) -> bool:
        logger.info(f"Attempting to delete product ID {product_id}")
        return self.product_repo.delete(product_id)
