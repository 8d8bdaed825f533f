# factory_ops/constants.py

from decimal import Decimal
from enum import Enum

# General
DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_UNIT = "kg"
DEFAULT_PIECE_UNIT = "pcs"
PURCHASE_REQUEST_BUFFER = Decimal("1.1")  # +10% on top of the shortage
PURCHASE_LEAD_DAYS = 7
NEAR_COMPLETION_PERCENT = Decimal("90")


class Collection(str, Enum):
    """Top-level keys of the factory document."""
    PACKING_ORDERS = "packing_orders"
    MOLDING_LOGS = "molding_logs"
    FINISHED_GOODS = "packing_inventory"
    RAW_MATERIALS = "packing_raw_materials"
    MACHINES = "factory_machines"
    EMPLOYEES = "packing_employees"
    QC_ENTRIES = "packing_qc_entries"
    PRODUCTS = "factory_products"
    SETTINGS = "factory_settings"
    WAREHOUSE_LOCATIONS = "warehouse_locations"
    PACKING_BOMS = "packing_boms"
    PACKING_LOGS = "packing_logs"
    MAINTENANCE_LOGS = "maintenance_logs"
    SUPPLIERS = "factory_suppliers"
    PURCHASE_ORDERS = "factory_purchase_orders"
    QUOTATIONS = "factory_quotations"
    READ_NOTIFICATIONS = "read_notifications"
    CUSTOMERS = "factory_customers"
    COMPLAINTS = "factory_complaints"
    PRODUCTION_QUEUE = "production_queue"
    MACHINE_DAILY_LOGS = "machine_daily_logs"
    PACKING_STATIONS = "packing_stations"
    PACKING_QUEUE = "packing_queue"
    PRODUCTION_DOCUMENTS = "production_documents"


class ProductionDocumentStatus(Enum):
    DRAFT = "Draft"
    MATERIAL_CHECKING = "Material Checking"
    APPROVED = "Approved"
    IN_PROGRESS = "In Progress"
    READY_TO_SHIP = "Ready to Ship"
    COMPLETED = "Completed"


class ShippingStatus(Enum):
    PENDING = "Pending"
    READY = "Ready"
    PARTIAL = "Partial"
    COMPLETED = "Completed"


class PurchaseOrderStatus(Enum):
    PENDING = "Pending"
    SHIPPED = "Shipped"
    RECEIVED = "Received"
    CANCELLED = "Cancelled"


class QCStatus(Enum):
    PENDING = "Pending"
    PASSED = "Passed"
    FAILED = "Failed"


class ISOStatus(Enum):
    QUARANTINE = "Quarantine"
    RELEASED = "Released"
    HOLD = "Hold"
    REJECTED = "Rejected"


class InventorySource(Enum):
    PURCHASED = "Purchased"
    PRODUCED = "Produced"


class InventoryCategory(Enum):
    MATERIAL = "Material"
    COMPONENT = "Component"
    FINISHED = "Finished"


class QCDestination(Enum):
    FINISHED = "Finished"
    COMPONENT = "Component"


class LocationType(Enum):
    RACK = "Rack"
    FLOOR = "Floor"
    BIN = "Bin"
    WALL = "Wall"
    DOOR = "Door"
    OBSTACLE = "Obstacle"


class Priority(Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class JobHealth(Enum):
    DRAFT = "Draft"
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    NEAR_COMPLETION = "Near Completion"
    COMPLETED = "Completed"


# Production steps and machine statuses are editable in the settings document;
# these are the plant's defaults (Thai, as entered on the floor).
STEP_WAITING_MOLDING = "รอฉีด"
STEP_WAITING_ASSEMBLY = "รอประกอบ"
STEP_WAITING_PACKING = "รอแพค"
STEP_WAITING_COUNT = "รอนับ"
STEP_FINISHED = "เสร็จสิ้น"
DEFAULT_PRODUCTION_STEPS = [
    STEP_WAITING_MOLDING, STEP_WAITING_ASSEMBLY, STEP_WAITING_PACKING,
    STEP_WAITING_COUNT, STEP_FINISHED,
]

MACHINE_RUNNING = "ทำงาน"
MACHINE_IDLE = "ว่าง"
MACHINE_BROKEN = "เสีย"
DEFAULT_MACHINE_STATUSES = [MACHINE_RUNNING, MACHINE_IDLE, MACHINE_BROKEN]

DEFAULT_SHIFTS = ["เช้า", "ดึก"]
UNASSIGNED_MACHINE = "ยังไม่ระบุ"
UNASSIGNED_OPERATOR = "---รอการมอบหมาย---"
DEFAULT_LOW_STOCK_THRESHOLD = Decimal("1000")
DEFAULT_LOCATION_CAPACITY = Decimal("1000")
