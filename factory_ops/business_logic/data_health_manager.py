# factory_ops/business_logic/data_health_manager.py

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, List

from factory_ops.data_access.customers_repository import CustomersRepository
from factory_ops.data_access.products_repository import ProductsRepository
from factory_ops.data_access.raw_materials_repository import RawMaterialsRepository

logger = logging.getLogger(__name__)

ISSUE_PRODUCT = "Product"
ISSUE_CUSTOMER = "Customer"
ISSUE_MATERIAL = "Material"

TEXT_FIELDS = ("phone", "contact_person")


@dataclass
class DataIssue:
    id: str
    type: str
    entity_id: str
    name: str
    issue: str
    field: str


class DataHealthManager:
    """Finds master data that is missing values other screens rely on."""

    def __init__(self, products_repository: ProductsRepository,
                 customers_repository: CustomersRepository,
                 raw_materials_repository: RawMaterialsRepository):
        if products_repository is None: raise ValueError("products_repository cannot be None")
        if customers_repository is None: raise ValueError("customers_repository cannot be None")
        if raw_materials_repository is None: raise ValueError("raw_materials_repository cannot be None")
        self.products_repo = products_repository
        self.customers_repo = customers_repository
        self.raw_material_repo = raw_materials_repository

    def scan(self) -> List[DataIssue]:
        issues: List[DataIssue] = []

        for p in self.products_repo.get_all():
            if not p.sale_price or p.sale_price <= 0:
                issues.append(DataIssue(f"p-price-{p.id}", ISSUE_PRODUCT, p.id, p.name,
                                        "Sale price is not set", "sale_price"))
            if not p.cycle_time_seconds or p.cycle_time_seconds <= 0:
                issues.append(DataIssue(f"p-cycle-{p.id}", ISSUE_PRODUCT, p.id, p.name,
                                        "Cycle time is missing", "cycle_time_seconds"))
            if not p.bom:
                issues.append(DataIssue(f"p-bom-{p.id}", ISSUE_PRODUCT, p.id, p.name,
                                        "No BOM linked", "bom"))

        for c in self.customers_repo.get_all():
            if not c.phone or not c.phone.strip():
                issues.append(DataIssue(f"c-phone-{c.id}", ISSUE_CUSTOMER, c.id, c.name,
                                        "Customer has no phone number", "phone"))
            if not c.contact_person or not c.contact_person.strip():
                issues.append(DataIssue(f"c-contact-{c.id}", ISSUE_CUSTOMER, c.id, c.name,
                                        "No contact person", "contact_person"))

        for m in self.raw_material_repo.get_all():
            if not m.cost_per_unit or m.cost_per_unit <= 0:
                issues.append(DataIssue(f"m-cost-{m.id}", ISSUE_MATERIAL, m.id, m.name,
                                        "Material has no cost per unit", "cost_per_unit"))

        logger.debug(f"Data health scan found {len(issues)} issues.")
        return issues

    @staticmethod
    def health_score(issues: List[DataIssue]) -> int:
        return max(0, 100 - len(issues) * 2)

    def apply_fix(self, issue: DataIssue, value: Any):
        if issue.field == "bom":
            raise ValueError("BOM issues are fixed in the BOM editor.")
        if issue.field in TEXT_FIELDS:
            value = str(value).strip()
            if not value:
                raise ValueError("Value cannot be empty.")
        else:
            try:
                value = Decimal(str(value))
            except InvalidOperation:
                raise ValueError(f"'{value}' is not a valid number.")
            if value <= 0:
                raise ValueError("Value must be greater than zero.")

        repo = {
            ISSUE_PRODUCT: self.products_repo,
            ISSUE_CUSTOMER: self.customers_repo,
            ISSUE_MATERIAL: self.raw_material_repo,
        }[issue.type]
        entity = repo.get_by_id(issue.entity_id)
        if not entity:
            raise ValueError(f"{issue.type} with ID {issue.entity_id} no longer exists.")
        setattr(entity, issue.field, value)
        logger.info(f"Data fix applied: {issue.type} {issue.entity_id}.{issue.field} = {value}")
        return repo.update(entity)
