# factory_ops/business_logic/entities/purchase_order_item_entity.py
from dataclasses import dataclass, field
from decimal import Decimal
from .base_entity import BaseEntity

@dataclass
class PurchaseOrderItemEntity(BaseEntity):
    raw_material_id: str = ""
    quantity: Decimal = field(default_factory=lambda: Decimal("0"))
    unit_price: Decimal = field(default_factory=lambda: Decimal("0"))
