# factory_ops/business_logic/entities/employee_entity.py
from dataclasses import dataclass, field
from typing import Optional
from decimal import Decimal
from datetime import date
from .base_entity import BaseEntity

@dataclass
class EmployeeEntity(BaseEntity):
    name: str
    role_id: str = ""
    status: str = "Active"
    department: str = ""
    daily_wage: Decimal = field(default_factory=lambda: Decimal("0"))
    phone: str = ""
    address: str = ""
    hire_date: Optional[date] = None
    include_in_wage_calculation: Optional[bool] = None
