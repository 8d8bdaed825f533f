# factory_ops/main_app.py
import sys
import logging
import logging.config
from PyQt5.QtWidgets import QApplication, QMainWindow, QTabWidget, QMessageBox, QLabel
from PyQt5.QtCore import QLocale

# --- Configuration and Constants ---
from factory_ops.config import DATABASE_PATH, DEFAULT_LANGUAGE, LOGGING_CONFIG, ensure_directories

# --- Data Access Layer (DAL) ---
from factory_ops.data_access.database_manager import DatabaseManager
from factory_ops.data_access.document_gateway import FactoryDocumentGateway
from factory_ops.data_access.products_repository import ProductsRepository
from factory_ops.data_access.raw_materials_repository import RawMaterialsRepository
from factory_ops.data_access.finished_goods_repository import FinishedGoodsRepository
from factory_ops.data_access.production_documents_repository import ProductionDocumentsRepository
from factory_ops.data_access.molding_logs_repository import MoldingLogsRepository
from factory_ops.data_access.machines_repository import MachinesRepository
from factory_ops.data_access.employees_repository import EmployeesRepository
from factory_ops.data_access.qc_entries_repository import QCEntriesRepository
from factory_ops.data_access.suppliers_repository import SuppliersRepository
from factory_ops.data_access.customers_repository import CustomersRepository
from factory_ops.data_access.purchase_orders_repository import PurchaseOrdersRepository
from factory_ops.data_access.quotations_repository import QuotationsRepository
from factory_ops.data_access.maintenance_logs_repository import MaintenanceLogsRepository
from factory_ops.data_access.warehouse_locations_repository import WarehouseLocationsRepository

# --- Business Logic Layer (BLL) ---
from factory_ops.business_logic.factory_store import FactoryStore
from factory_ops.business_logic.settings_manager import SettingsManager
from factory_ops.business_logic.product_manager import ProductManager
from factory_ops.business_logic.bom_manager import BomManager
from factory_ops.business_logic.production_manager import ProductionManager
from factory_ops.business_logic.machine_manager import MachineManager
from factory_ops.business_logic.warehouse_manager import WarehouseManager
from factory_ops.business_logic.production_order_manager import ProductionOrderManager
from factory_ops.business_logic.inventory_manager import InventoryManager
from factory_ops.business_logic.purchase_order_manager import PurchaseOrderManager
from factory_ops.business_logic.qc_manager import QCManager
from factory_ops.business_logic.report_manager import ReportManager
from factory_ops.business_logic.data_health_manager import DataHealthManager

# --- Presentation Layer (UI Tabs) ---
from factory_ops.presentation.dashboard_ui import DashboardUI
from factory_ops.presentation.production_orders_ui import ProductionOrdersUI
from factory_ops.presentation.production_ui import ProductionUI
from factory_ops.presentation.products_ui import ProductsUI
from factory_ops.presentation.maintenance_ui import MaintenanceUI
from factory_ops.presentation.warehouse_ui import WarehouseUI
from factory_ops.presentation.inventory_ui import InventoryUI
from factory_ops.presentation.purchase_orders_ui import PurchaseOrdersUI
from factory_ops.presentation.qc_ui import QCUI
from factory_ops.utils.i18n import Translator

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, translator: Translator, parent=None):
        super().__init__(parent)
        self.translator = translator
        self.setGeometry(100, 100, 1300, 800)

        logger.info("Initializing document store...")
        self.db_manager = DatabaseManager(DATABASE_PATH)
        self.gateway = FactoryDocumentGateway(self.db_manager)
        self.store = FactoryStore(self.gateway)
        try:
            self.store.load()
        except Exception as e:
            logger.error(f"FATAL: Could not load factory data: {e}", exc_info=True)
            QMessageBox.critical(self, "Database error", f"Could not open the factory data: {e}")
            sys.exit(1)

        logger.info("Initializing Repositories...")
        self.products_repo = ProductsRepository(self.store)
        self.raw_materials_repo = RawMaterialsRepository(self.store)
        self.finished_goods_repo = FinishedGoodsRepository(self.store)
        self.documents_repo = ProductionDocumentsRepository(self.store)
        self.molding_logs_repo = MoldingLogsRepository(self.store)
        self.machines_repo = MachinesRepository(self.store)
        self.employees_repo = EmployeesRepository(self.store)
        self.qc_entries_repo = QCEntriesRepository(self.store)
        self.suppliers_repo = SuppliersRepository(self.store)
        self.customers_repo = CustomersRepository(self.store)
        self.purchase_orders_repo = PurchaseOrdersRepository(self.store)
        self.quotations_repo = QuotationsRepository(self.store)
        self.maintenance_logs_repo = MaintenanceLogsRepository(self.store)
        self.locations_repo = WarehouseLocationsRepository(self.store)

        logger.info("Initializing Managers...")
        self.settings_manager = SettingsManager(self.store)
        self.translator.set_language(self.settings_manager.get_language(self.translator.language))
        self.product_manager = ProductManager(self.products_repo)
        self.bom_manager = BomManager(self.products_repo, self.raw_materials_repo)
        self.production_manager = ProductionManager(
            self.molding_logs_repo, self.documents_repo, self.products_repo, self.settings_manager)
        self.machine_manager = MachineManager(self.machines_repo, self.maintenance_logs_repo, self.settings_manager)
        self.warehouse_manager = WarehouseManager(
            self.locations_repo, self.raw_materials_repo, self.finished_goods_repo)
        self.order_manager = ProductionOrderManager(
            store=self.store,
            documents_repository=self.documents_repo,
            products_repository=self.products_repo,
            raw_materials_repository=self.raw_materials_repo,
            molding_logs_repository=self.molding_logs_repo,
            purchase_orders_repository=self.purchase_orders_repo,
            suppliers_repository=self.suppliers_repo,
            settings_manager=self.settings_manager,
        )
        self.inventory_manager = InventoryManager(
            self.raw_materials_repo, self.finished_goods_repo, self.settings_manager)
        self.po_manager = PurchaseOrderManager(
            self.store, self.purchase_orders_repo, self.raw_materials_repo,
            self.suppliers_repo, self.quotations_repo)
        self.qc_manager = QCManager(
            self.store, self.molding_logs_repo, self.finished_goods_repo,
            self.raw_materials_repo, self.products_repo, self.qc_entries_repo)
        self.report_manager = ReportManager(
            self.store, self.machines_repo, self.molding_logs_repo,
            self.qc_entries_repo, self.documents_repo, self.employees_repo)
        self.data_health_manager = DataHealthManager(
            self.products_repo, self.customers_repo, self.raw_materials_repo)

        logger.info("Setting up UI...")
        self._setup_ui()
        self._unsubscribe = self.store.subscribe(self._on_store_changed)
        self._update_status_bar()
        logger.info("MainWindow initialized and UI setup complete.")

    def _setup_ui(self):
        t = self.translator.t
        self.setWindowTitle(f"{t('app.name')} - {t('app.desc')}")
        self.tabs = QTabWidget()

        self.dashboard_tab = DashboardUI(self.report_manager, self.inventory_manager,
                                         self.data_health_manager, self.translator, self)
        self.tabs.addTab(self.dashboard_tab, t("nav.dashboard"))

        self.production_orders_tab = ProductionOrdersUI(
            order_manager=self.order_manager,
            product_manager=self.product_manager,
            translator=self.translator,
            parent=self
        )
        self.tabs.addTab(self.production_orders_tab, t("nav.poDocs"))

        self.production_tab = ProductionUI(self.production_manager, self.settings_manager, self.translator, self)
        self.tabs.addTab(self.production_tab, t("nav.production"))

        self.qc_tab = QCUI(self.qc_manager, self.translator, self)
        self.tabs.addTab(self.qc_tab, t("nav.qc"))

        self.inventory_tab = InventoryUI(self.inventory_manager, self.settings_manager, self.translator, self)
        self.tabs.addTab(self.inventory_tab, t("inv.title"))

        self.purchase_orders_tab = PurchaseOrdersUI(self.po_manager, self.translator, self)
        self.tabs.addTab(self.purchase_orders_tab, t("nav.purchasing"))

        self.products_tab = ProductsUI(self.product_manager, self.bom_manager, self.translator, self)
        self.tabs.addTab(self.products_tab, t("nav.products"))

        self.maintenance_tab = MaintenanceUI(self.machine_manager, self.settings_manager, self.translator, self)
        self.tabs.addTab(self.maintenance_tab, t("nav.maintenance"))

        self.warehouse_tab = WarehouseUI(self.warehouse_manager, self.translator, self)
        self.tabs.addTab(self.warehouse_tab, t("nav.warehouse"))

        self.setCentralWidget(self.tabs)
        self.status_label = QLabel("")
        self.statusBar().addPermanentWidget(self.status_label)

    def _on_store_changed(self, data):
        self.dashboard_tab.load_dashboard_data()
        self.production_orders_tab.load_documents_data()
        self.qc_tab.load_pending_jobs()
        self.inventory_tab.load_inventory_data()
        self.purchase_orders_tab.load_purchase_orders_data()
        self.production_tab.load_production_data()
        self.products_tab.load_products_data()
        self.maintenance_tab.load_machines_data()
        self.warehouse_tab.load_locations_data()
        self._update_status_bar()

    def _update_status_bar(self):
        if self.store.is_offline:
            self.statusBar().showMessage(self.store.last_error or self.translator.t("common.offline"))
        else:
            self.statusBar().clearMessage()
        last_updated = self.gateway.last_updated() if not self.store.is_offline else None
        self.status_label.setText(last_updated or "")

    def closeEvent(self, event):
        self._unsubscribe()
        super().closeEvent(event)


def main():
    ensure_directories()
    logging.config.dictConfig(LOGGING_CONFIG)
    logger.info("Application starting...")
    app = QApplication(sys.argv)
    english_locale = QLocale(QLocale.Language.English, QLocale.Country.UnitedStates)
    QLocale.setDefault(english_locale)

    translator = Translator(DEFAULT_LANGUAGE)
    main_window = MainWindow(translator)
    main_window.show()
    logger.info("Application started successfully. Main window shown.")
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
