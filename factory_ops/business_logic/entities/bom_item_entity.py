# factory_ops/business_logic/entities/bom_item_entity.py
from dataclasses import dataclass
from decimal import Decimal
from .base_entity import BaseEntity

@dataclass
class BomItemEntity(BaseEntity):
    material_id: str = ""
    material_name: str = ""  # name as recorded when the BOM was edited
    quantity_per_unit: Decimal = Decimal("0")
