# factory_ops/business_logic/entities/product_entity.py
from dataclasses import dataclass, field
from typing import Optional, List
from decimal import Decimal
from .base_entity import BaseEntity
from .bom_item_entity import BomItemEntity

@dataclass
class ProductEntity(BaseEntity):
    name: str

    color: Optional[str] = None
    product_type: Optional[str] = None
    category: Optional[str] = None
    standard_color: Optional[str] = None
    cycle_time_seconds: Decimal = field(default_factory=lambda: Decimal("0"))
    cavity: Optional[int] = None            # parts per shot
    min_tonnage: Optional[Decimal] = None   # smallest machine able to run the mold
    sale_price: Decimal = field(default_factory=lambda: Decimal("0"))
    creates_raw_material_id: Optional[str] = None  # set when the product is itself a component
    bom: List[BomItemEntity] = field(default_factory=list)
