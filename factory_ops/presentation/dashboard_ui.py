# factory_ops/presentation/dashboard_ui.py

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QGroupBox, QLabel, QPushButton, QMessageBox
from PyQt5.QtCore import Qt

from factory_ops.business_logic.data_health_manager import DataHealthManager
from factory_ops.business_logic.inventory_manager import InventoryManager
from factory_ops.business_logic.report_manager import ReportManager
from factory_ops.utils.i18n import Translator

import logging
logger = logging.getLogger(__name__)


class DashboardUI(QWidget):
    def __init__(self, report_manager: ReportManager, inventory_manager: InventoryManager,
                 data_health_manager: DataHealthManager, translator: Translator, parent=None):
        super().__init__(parent)
        self.report_manager = report_manager
        self.inventory_manager = inventory_manager
        self.data_health_manager = data_health_manager
        self.translator = translator
        self._value_labels = {}
        self._init_ui()
        self.load_dashboard_data()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        group = QGroupBox(self.translator.t("nav.dashboard"))
        grid = QGridLayout(group)
        captions = [
            ("total_orders", "Orders"),
            ("production_documents", self.translator.t("nav.poDocs")),
            ("active_machines", "Machines running"),
            ("total_produced", "Produced"),
            ("qc_pending", self.translator.t("qc.pending")),
            ("low_stock", "Low stock items"),
            ("health_score", "Data health"),
        ]
        for row, (key, caption) in enumerate(captions):
            grid.addWidget(QLabel(caption), row, 0)
            value_label = QLabel("-")
            value_label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            grid.addWidget(value_label, row, 1)
            self._value_labels[key] = value_label
        layout.addWidget(group)

        self.refresh_button = QPushButton(self.translator.t("common.refresh"))
        self.refresh_button.clicked.connect(self.load_dashboard_data)
        layout.addWidget(self.refresh_button)
        layout.addStretch()

    def load_dashboard_data(self):
        try:
            summary = self.report_manager.dashboard_summary()
            self._value_labels["total_orders"].setText(str(summary["total_orders"]))
            self._value_labels["production_documents"].setText(str(summary["production_documents"]))
            self._value_labels["active_machines"].setText(
                f"{summary['active_machines']} / {summary['total_machines']}")
            self._value_labels["total_produced"].setText(f"{summary['total_produced']:,.0f}")
            self._value_labels["qc_pending"].setText(str(summary["qc_pending"]))
            self._value_labels["low_stock"].setText(str(len(self.inventory_manager.get_low_stock_items())))
            issues = self.data_health_manager.scan()
            self._value_labels["health_score"].setText(f"{DataHealthManager.health_score(issues)}%")
        except Exception as e:
            logger.error(f"Error loading dashboard: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not load dashboard: {e}")
