# factory_ops/data_access/__init__.py

from .database_manager import DatabaseManager
from .document_gateway import FactoryDocumentGateway, StoreUnavailableError, sanitize_data
from .base_repository import BaseRepository

from .products_repository import ProductsRepository
from .raw_materials_repository import RawMaterialsRepository
from .finished_goods_repository import FinishedGoodsRepository
from .production_documents_repository import ProductionDocumentsRepository
from .molding_logs_repository import MoldingLogsRepository
from .machines_repository import MachinesRepository
from .maintenance_logs_repository import MaintenanceLogsRepository
from .employees_repository import EmployeesRepository
from .qc_entries_repository import QCEntriesRepository
from .suppliers_repository import SuppliersRepository
from .customers_repository import CustomersRepository
from .purchase_orders_repository import PurchaseOrdersRepository
from .quotations_repository import QuotationsRepository
from .warehouse_locations_repository import WarehouseLocationsRepository

ALL_REPOSITORIES = [
    ProductsRepository, RawMaterialsRepository, FinishedGoodsRepository,
    ProductionDocumentsRepository, MoldingLogsRepository, MachinesRepository,
    MaintenanceLogsRepository, EmployeesRepository, QCEntriesRepository,
    SuppliersRepository, CustomersRepository, PurchaseOrdersRepository,
    QuotationsRepository, WarehouseLocationsRepository,
]
