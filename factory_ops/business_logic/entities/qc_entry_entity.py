# factory_ops/business_logic/entities/qc_entry_entity.py
from dataclasses import dataclass, field
from typing import Optional, List
from decimal import Decimal
from datetime import date
from .base_entity import BaseEntity
from factory_ops.constants import QCStatus

@dataclass
class QCEntryEntity(BaseEntity):
    product_name: str
    molding_log_id: str = ""
    order_id: str = ""
    lot_number: str = ""
    employee_name: str = ""
    source_date: Optional[date] = None
    status: QCStatus = QCStatus.PENDING
    quantity: Decimal = field(default_factory=lambda: Decimal("0"))
    unit: str = ""

    qc_inspector: Optional[str] = None
    reasons: List[str] = field(default_factory=list)
    qc_date: Optional[date] = None
    notes: Optional[str] = None
