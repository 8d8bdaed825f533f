# factory_ops/business_logic/entities/quotation_entity.py
from dataclasses import dataclass, field
from typing import Optional
from decimal import Decimal
from datetime import date
from .base_entity import BaseEntity

@dataclass
class QuotationEntity(BaseEntity):
    raw_material_id: str
    supplier_id: str
    price_per_unit: Decimal = field(default_factory=lambda: Decimal("0"))
    moq: Decimal = field(default_factory=lambda: Decimal("0"))  # minimum order quantity
    unit: str = ""
    lead_time_days: int = 0
    payment_term: str = ""
    quotation_date: Optional[date] = None
    valid_until: Optional[date] = None
    note: Optional[str] = None
    is_preferred: bool = False
