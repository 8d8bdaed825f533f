# factory_ops/business_logic/entities/inventory_item_entity.py
from dataclasses import dataclass, field
from typing import Optional
from decimal import Decimal
from datetime import date
from .base_entity import BaseEntity
from factory_ops.constants import ISOStatus, DEFAULT_UNIT

@dataclass
class InventoryItemEntity(BaseEntity):
    """A stock line: raw material, produced component or finished good."""
    name: str
    quantity: Decimal = field(default_factory=lambda: Decimal("0"))
    unit: str = DEFAULT_UNIT

    cost_per_unit: Optional[Decimal] = None
    reserved_quantity: Optional[Decimal] = None
    source: Optional[str] = None       # InventorySource value
    category: Optional[str] = None     # InventoryCategory value
    product_id: Optional[str] = None   # finished goods only
    default_supplier_id: Optional[str] = None

    # warehouse / ISO fields
    location_id: Optional[str] = None
    lot_number: Optional[str] = None
    received_date: Optional[date] = None
    expiry_date: Optional[date] = None
    iso_status: Optional[ISOStatus] = None
