# factory_ops/business_logic/entities/customer_entity.py
from dataclasses import dataclass
from .base_entity import BaseEntity

@dataclass
class CustomerEntity(BaseEntity):
    name: str
    contact_person: str = ""
    phone: str = ""
    address: str = ""
