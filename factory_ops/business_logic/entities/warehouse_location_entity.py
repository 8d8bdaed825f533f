# factory_ops/business_logic/entities/warehouse_location_entity.py
from dataclasses import dataclass, field
from typing import Optional, List
from decimal import Decimal
from .base_entity import BaseEntity
from factory_ops.constants import LocationType, Priority

@dataclass
class WarehouseLocationEntity(BaseEntity):
    name: str   # Zone-Rack-Level, e.g. "A-01-01"
    zone: str
    type: LocationType = LocationType.RACK
    capacity: Decimal = field(default_factory=lambda: Decimal("0"))  # kg or pallets
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    priority: Optional[Priority] = None

    # layout on the map, in px
    x: Optional[Decimal] = None
    y: Optional[Decimal] = None
    w: Optional[Decimal] = None
    h: Optional[Decimal] = None
    rotation: Optional[int] = None
    color: Optional[str] = None
