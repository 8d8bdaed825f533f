# factory_ops/business_logic/material_requirements.py
"""
Material requirement and shortage calculation for production order documents.

All functions here are pure: they read the snapshots passed in and build a
fresh result on every call.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from factory_ops.business_logic.entities.inventory_item_entity import InventoryItemEntity
from factory_ops.business_logic.entities.material_requirement_entity import MaterialRequirement
from factory_ops.business_logic.entities.product_entity import ProductEntity
from factory_ops.business_logic.entities.production_document_entity import ProductionDocumentEntity
from factory_ops.constants import DEFAULT_UNIT

logger = logging.getLogger(__name__)


def resolve_product(product_name: Optional[str], product_id: Optional[str],
                    products: Iterable[ProductEntity]) -> Optional[ProductEntity]:
    """Finds a product by name first, then by id. Older records only carry the name."""
    products = list(products)
    if product_name:
        for product in products:
            if product.name == product_name:
                return product
    if product_id:
        for product in products:
            if product.id == product_id:
                return product
    return None


def compute_requirements(order: ProductionDocumentEntity,
                         products: List[ProductEntity],
                         raw_materials: List[InventoryItemEntity]) -> Dict[str, MaterialRequirement]:
    """
    Total material needed for every line item of the order, keyed by material id.

    Missing products contribute nothing. Materials missing from the catalog are
    reported with zero stock so they always show as a shortage.
    """
    requirements: Dict[str, MaterialRequirement] = {}
    materials_by_id = {m.id: m for m in raw_materials}

    for item in order.items:
        quantity = Decimal(str(item.quantity or 0))
        if quantity <= 0:
            continue

        product = resolve_product(item.product_name, item.product_id, products)
        if product is None:
            logger.debug(f"Line item '{item.product_name or item.product_id}' matches no product.")
            continue
        if not product.bom:
            continue

        for bom_item in product.bom:
            partial_need = Decimal(str(bom_item.quantity_per_unit or 0)) * quantity
            requirement = requirements.get(bom_item.material_id)
            if requirement is None:
                material = materials_by_id.get(bom_item.material_id)
                if material is not None:
                    requirement = MaterialRequirement(
                        material_id=bom_item.material_id,
                        name=material.name,
                        current=Decimal(str(material.quantity or 0)),
                        unit=material.unit or DEFAULT_UNIT,
                    )
                else:
                    requirement = MaterialRequirement(
                        material_id=bom_item.material_id,
                        name=bom_item.material_name or bom_item.material_id,
                        current=Decimal("0"),
                        unit=DEFAULT_UNIT,
                    )
                requirements[bom_item.material_id] = requirement
            requirement.needed += partial_need

    return requirements


def has_shortage(requirements: Dict[str, MaterialRequirement]) -> bool:
    return any(r.needed > r.current for r in requirements.values())


def shortages(requirements: Dict[str, MaterialRequirement]) -> List[MaterialRequirement]:
    """Requirements not covered by stock, largest shortage first."""
    short = [r for r in requirements.values() if r.is_shortage]
    return sorted(short, key=lambda r: r.shortage, reverse=True)
