# factory_ops/business_logic/entities/material_requirement_entity.py
from dataclasses import dataclass, field
from decimal import Decimal

@dataclass
class MaterialRequirement:
    """Aggregated demand for one raw material. Derived, never persisted."""
    material_id: str
    name: str
    current: Decimal
    unit: str
    needed: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def is_shortage(self) -> bool:
        return self.needed > self.current

    @property
    def shortage(self) -> Decimal:
        if self.needed > self.current:
            return self.needed - self.current
        return Decimal("0")
