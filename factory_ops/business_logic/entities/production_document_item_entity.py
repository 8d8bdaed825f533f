# factory_ops/business_logic/entities/production_document_item_entity.py
from dataclasses import dataclass, field
from typing import Optional
from decimal import Decimal
from datetime import date
from .base_entity import BaseEntity
from factory_ops.constants import DEFAULT_PIECE_UNIT

@dataclass
class ProductionDocumentItemEntity(BaseEntity):
    # legacy records carry only the name, newer ones both; lookups try the name first
    product_name: str = ""
    product_id: Optional[str] = None
    quantity: Decimal = field(default_factory=lambda: Decimal("0"))
    unit: str = DEFAULT_PIECE_UNIT
    due_date: Optional[date] = None
    note: Optional[str] = None
    delivered_quantity: Optional[Decimal] = None
