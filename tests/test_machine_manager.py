# tests/test_machine_manager.py

from decimal import Decimal

import pytest

from factory_ops.business_logic.machine_manager import MachineManager
from factory_ops.business_logic.report_manager import ReportManager
from factory_ops.constants import MACHINE_IDLE, MACHINE_RUNNING


@pytest.fixture
def machine_manager(repos, settings_manager):
    return MachineManager(repos.machines, repos.maintenance_logs, settings_manager)


def test_new_machine_starts_idle(machine_manager):
    machine = machine_manager.add_machine("เครื่องฉีด 3")

    assert machine.status == MACHINE_IDLE
    with pytest.raises(ValueError):
        machine_manager.add_machine("เครื่องฉีด 3")


def test_starting_a_machine_records_the_time(machine_manager):
    machine = machine_manager.update_status("m1", MACHINE_RUNNING)

    assert machine.last_started_at
    with pytest.raises(ValueError):
        machine_manager.update_status("m1", "flying")


def test_downtime_totals_per_machine(machine_manager):
    machine_manager.log_maintenance("m1", "Somsak", "Repair", Decimal("2.5"))
    machine_manager.log_maintenance("m1", "Somsak", "PM", Decimal("1"))
    machine_manager.log_maintenance("m2", "Anan", "PM", Decimal("4"))

    assert machine_manager.downtime_by_machine() == {"m1": Decimal("3.5"), "m2": Decimal("4")}
    assert len(machine_manager.get_maintenance_logs("m1")) == 2
    with pytest.raises(ValueError):
        machine_manager.log_maintenance("m1", "Somsak", "PM", Decimal("-1"))
    with pytest.raises(ValueError):
        machine_manager.log_maintenance("nope", "Somsak", "PM", Decimal("1"))


def test_dashboard_summary_counts(store, repos, machine_manager):
    machine_manager.update_status("m2", MACHINE_RUNNING)
    report_manager = ReportManager(store, repos.machines, repos.molding_logs,
                                   repos.qc_entries, repos.documents, repos.employees)

    summary = report_manager.dashboard_summary()

    assert summary["total_orders"] == 1
    assert summary["production_documents"] == 0
    assert summary["active_machines"] == 1
    assert summary["total_machines"] == 2
    assert summary["active_employees"] == 1
    assert summary["qc_pending"] == 0
