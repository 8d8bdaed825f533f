# factory_ops/business_logic/entities/base_entity.py
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

@dataclass
class BaseEntity:
    id: Optional[str] = field(default=None, kw_only=True) # kw_only=True makes it a keyword-only argument
    # keys found in the document that the entity does not model; written back untouched
    extra: Dict[str, Any] = field(default_factory=dict, kw_only=True, compare=False, repr=False)
