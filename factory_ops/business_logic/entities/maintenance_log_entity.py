# factory_ops/business_logic/entities/maintenance_log_entity.py
from dataclasses import dataclass, field
from decimal import Decimal
import datetime
from .base_entity import BaseEntity

@dataclass
class MaintenanceLogEntity(BaseEntity):
    machine_id: str
    technician: str = ""
    type: str = ""
    date: datetime.date = field(default_factory=datetime.date.today)
    downtime_hours: Decimal = field(default_factory=lambda: Decimal("0"))
    description: str = ""
