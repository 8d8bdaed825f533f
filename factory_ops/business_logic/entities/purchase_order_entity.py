# factory_ops/business_logic/entities/purchase_order_entity.py
from dataclasses import dataclass, field
from typing import Optional, List
from datetime import date
from .base_entity import BaseEntity
from .purchase_order_item_entity import PurchaseOrderItemEntity
from factory_ops.constants import PurchaseOrderStatus

@dataclass
class PurchaseOrderEntity(BaseEntity):
    po_number: str
    supplier_id: str = ""
    order_date: date = field(default_factory=date.today)
    expected_date: Optional[date] = None
    status: PurchaseOrderStatus = PurchaseOrderStatus.PENDING
    items: List[PurchaseOrderItemEntity] = field(default_factory=list)
    linked_production_doc_id: Optional[str] = None  # set for purchase requests raised from a shortage
