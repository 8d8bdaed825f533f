# factory_ops/business_logic/entities/molding_log_entity.py
from dataclasses import dataclass, field
from typing import Optional
from decimal import Decimal
import datetime
from .base_entity import BaseEntity

@dataclass
class MoldingLogEntity(BaseEntity):
    job_id: str
    order_id: str
    product_name: str
    product_id: Optional[str] = None
    date: datetime.date = field(default_factory=datetime.date.today)
    status: str = ""   # one of the configured production steps
    machine: str = ""
    operator_name: str = ""
    shift: str = ""
    lot_number: str = ""
    quantity_produced: Decimal = field(default_factory=lambda: Decimal("0"))
    quantity_rejected: Decimal = field(default_factory=lambda: Decimal("0"))

    target_quantity: Optional[Decimal] = None
    priority: Optional[int] = None
    hours: Optional[Decimal] = None
    material_cost: Optional[Decimal] = None
    start_time: Optional[str] = None
