# factory_ops/business_logic/entities/supplier_entity.py
from dataclasses import dataclass
from .base_entity import BaseEntity

@dataclass
class SupplierEntity(BaseEntity):
    name: str
    contact_person: str = ""
    phone: str = ""
