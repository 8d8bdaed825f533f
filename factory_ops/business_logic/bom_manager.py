# factory_ops/business_logic/bom_manager.py

from typing import Optional, List, Dict, Any
from decimal import Decimal, InvalidOperation

from factory_ops.business_logic.entities.bom_item_entity import BomItemEntity
from factory_ops.business_logic.entities.product_entity import ProductEntity
from factory_ops.business_logic.entities.material_requirement_entity import MaterialRequirement
from factory_ops.business_logic.material_requirements import compute_requirements
from factory_ops.business_logic.entities.production_document_entity import ProductionDocumentEntity
from factory_ops.business_logic.entities.production_document_item_entity import ProductionDocumentItemEntity

from factory_ops.data_access.products_repository import ProductsRepository
from factory_ops.data_access.raw_materials_repository import RawMaterialsRepository

import logging
logger = logging.getLogger(__name__)

class BomManager:
    def __init__(self,
                 product_repository: ProductsRepository,
                 raw_materials_repository: RawMaterialsRepository):
        if product_repository is None: raise ValueError("product_repository cannot be None")
        if raw_materials_repository is None: raise ValueError("raw_materials_repository cannot be None")

        self.product_repo = product_repository
        self.raw_material_repo = raw_materials_repository

    def _get_product(self, product_id: str) -> ProductEntity:
        product = self.product_repo.get_by_id(product_id)
        if not product:
            raise ValueError(f"Product with ID {product_id} not found.")
        return product

    def _validate_bom_data(self, product: ProductEntity, items_data: List[Dict[str, Any]]) -> List[BomItemEntity]:
        materials = {m.id: m for m in self.raw_material_repo.get_all()}
        material_ids = set()
        bom_items = []

        for idx, item_data in enumerate(items_data):
            material_id = item_data.get("material_id")
            if not material_id:
                raise ValueError(f"Material for line {idx+1} is not set.")
            material = materials.get(material_id)
            if not material:
                raise ValueError(f"Material with ID {material_id} (line {idx+1}) not found.")
            try:
                quantity_per_unit = Decimal(str(item_data.get("quantity_per_unit", "0")))
            except InvalidOperation:
                raise ValueError(
                    f"Quantity for line {idx+1} is not a valid number: '{item_data.get('quantity_per_unit')}'."
                )
            if quantity_per_unit < 0:
                raise ValueError(f"Quantity of '{material.name}' (line {idx+1}) cannot be negative.")
            if material_id in material_ids:
                raise ValueError(f"Material '{material.name}' appears more than once in the BOM.")
            if product.creates_raw_material_id and material_id == product.creates_raw_material_id:
                raise ValueError(f"Product '{product.name}' cannot consume the component it produces.")
            material_ids.add(material_id)
            bom_items.append(BomItemEntity(
                material_id=material_id,
                material_name=material.name,
                quantity_per_unit=quantity_per_unit,
            ))
        return bom_items

    def get_bom(self, product_id: str) -> List[BomItemEntity]:
        return list(self._get_product(product_id).bom)

    def set_bom(self, product_id: str, items_data: List[Dict[str, Any]]) -> ProductEntity:
        """Replaces the whole BOM. items_data: [{'material_id': ..., 'quantity_per_unit': ...}]"""
        logger.info(f"Attempting to set BOM for product ID {product_id} with {len(items_data)} items.")
        product = self._get_product(product_id)
        product.bom = self._validate_bom_data(product, items_data)
        updated = self.product_repo.update(product)
        if not updated:
            raise ValueError(f"BOM for product ID {product_id} could not be saved.")
        logger.info(f"BOM for product '{product.name}' saved with {len(product.bom)} items.")
        return updated

    def calculate_material_cost(self, product_id: str) -> Decimal:
        """Material cost of one unit. Materials without a cost count as zero."""
        product = self._get_product(product_id)
        materials = {m.id: m for m in self.raw_material_repo.get_all()}
        total = Decimal("0")
        for bom_item in product.bom:
            material = materials.get(bom_item.material_id)
            if material and material.cost_per_unit:
                total += bom_item.quantity_per_unit * material.cost_per_unit
        return total

    def calculate_required_materials(self, product_id: str, quantity: Decimal) -> Dict[str, MaterialRequirement]:
        product = self._get_product(product_id)
        single_line = ProductionDocumentEntity(
            doc_number="",
            items=[ProductionDocumentItemEntity(
                product_name=product.name, product_id=product.id, quantity=Decimal(str(quantity)),
            )],
        )
        return compute_requirements(single_line, [product], self.raw_material_repo.get_all())

    def bom_as_text(self, product_id: str) -> str:
        product = self._get_product(product_id)
        lines = [f"{item.material_name or item.material_id}: {item.quantity_per_unit}" for item in product.bom]
        return "\n".join(lines)
