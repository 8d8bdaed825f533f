# factory_ops/business_logic/entities/production_document_entity.py
from dataclasses import dataclass, field
from typing import Optional, List
import datetime
from .base_entity import BaseEntity
from .production_document_item_entity import ProductionDocumentItemEntity
from factory_ops.constants import ProductionDocumentStatus, ShippingStatus

@dataclass
class ProductionDocumentEntity(BaseEntity):
    doc_number: str
    date: datetime.date = field(default_factory=datetime.date.today)
    customer_name: str = ""
    status: ProductionDocumentStatus = ProductionDocumentStatus.DRAFT
    items: List[ProductionDocumentItemEntity] = field(default_factory=list)
    created_by: str = ""

    note: Optional[str] = None
    material_shortage: Optional[bool] = None
    signed_image_url: Optional[str] = None
    purchase_request_id: Optional[str] = None
    shipping_status: Optional[ShippingStatus] = None
