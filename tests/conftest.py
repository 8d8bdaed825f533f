# tests/conftest.py

from types import SimpleNamespace

import pytest

from factory_ops.business_logic.factory_store import FactoryStore
from factory_ops.business_logic.settings_manager import SettingsManager
from factory_ops.data_access import (
    DatabaseManager, FactoryDocumentGateway, ProductsRepository, RawMaterialsRepository,
    FinishedGoodsRepository, ProductionDocumentsRepository, MoldingLogsRepository,
    MachinesRepository, MaintenanceLogsRepository, EmployeesRepository, QCEntriesRepository,
    SuppliersRepository, CustomersRepository, PurchaseOrdersRepository, QuotationsRepository,
    WarehouseLocationsRepository,
)

# ids of the seeded materials and product
ABS_ID = "l6n1m3o7-o7l6-4mh-j-692l-2o1m4038o4m0"
WHITE_ID = "8daabcc1-3ee7-4be0-868c-b41c3922f26b"
GNT_PRODUCT_ID = "gnt-breaker-01"
GNT_PRODUCT_NAME = "GNT เบรคเกอร์ (สีขาว)"


@pytest.fixture
def db_manager(tmp_path):
    return DatabaseManager(str(tmp_path / "factory_test.db"))


@pytest.fixture
def gateway(db_manager):
    return FactoryDocumentGateway(db_manager)


@pytest.fixture
def store(gateway):
    factory_store = FactoryStore(gateway)
    factory_store.load()
    return factory_store


@pytest.fixture
def repos(store):
    return SimpleNamespace(
        products=ProductsRepository(store),
        raw_materials=RawMaterialsRepository(store),
        finished_goods=FinishedGoodsRepository(store),
        documents=ProductionDocumentsRepository(store),
        molding_logs=MoldingLogsRepository(store),
        machines=MachinesRepository(store),
        maintenance_logs=MaintenanceLogsRepository(store),
        employees=EmployeesRepository(store),
        qc_entries=QCEntriesRepository(store),
        suppliers=SuppliersRepository(store),
        customers=CustomersRepository(store),
        purchase_orders=PurchaseOrdersRepository(store),
        quotations=QuotationsRepository(store),
        locations=WarehouseLocationsRepository(store),
    )


@pytest.fixture
def settings_manager(store):
    return SettingsManager(store)
