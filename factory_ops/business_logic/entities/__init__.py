# factory_ops/business_logic/entities/__init__.py
from .base_entity import BaseEntity
from .bom_item_entity import BomItemEntity
from .product_entity import ProductEntity
from .inventory_item_entity import InventoryItemEntity
from .production_document_item_entity import ProductionDocumentItemEntity
from .production_document_entity import ProductionDocumentEntity
from .molding_log_entity import MoldingLogEntity
from .machine_entity import MachineEntity
from .maintenance_log_entity import MaintenanceLogEntity
from .employee_entity import EmployeeEntity
from .qc_entry_entity import QCEntryEntity
from .supplier_entity import SupplierEntity
from .customer_entity import CustomerEntity
from .purchase_order_item_entity import PurchaseOrderItemEntity
from .purchase_order_entity import PurchaseOrderEntity
from .quotation_entity import QuotationEntity
from .warehouse_location_entity import WarehouseLocationEntity
from .material_requirement_entity import MaterialRequirement

__all__ = [
    "BaseEntity", "BomItemEntity", "ProductEntity", "InventoryItemEntity",
    "ProductionDocumentItemEntity", "ProductionDocumentEntity", "MoldingLogEntity",
    "MachineEntity", "MaintenanceLogEntity", "EmployeeEntity", "QCEntryEntity",
    "SupplierEntity", "CustomerEntity", "PurchaseOrderItemEntity", "PurchaseOrderEntity",
    "QuotationEntity", "WarehouseLocationEntity", "MaterialRequirement",
]
