# factory_ops/business_logic/entities/machine_entity.py
from dataclasses import dataclass, field
from typing import Optional
from decimal import Decimal
from .base_entity import BaseEntity

@dataclass
class MachineEntity(BaseEntity):
    name: str
    status: str = ""
    location: str = ""
    working_hours_per_day: Decimal = field(default_factory=lambda: Decimal("24"))
    last_started_at: Optional[str] = None
    tonnage: Optional[Decimal] = None  # clamping force
