# tests/test_qc_manager.py

from decimal import Decimal

import pytest

from conftest import ABS_ID, GNT_PRODUCT_ID, GNT_PRODUCT_NAME, WHITE_ID
from factory_ops.business_logic.entities import MoldingLogEntity, QCEntryEntity
from factory_ops.business_logic.qc_manager import QCManager
from factory_ops.constants import (
    InventoryCategory, QCDestination, QCStatus, STEP_FINISHED, STEP_WAITING_COUNT,
)


@pytest.fixture
def qc_manager(store, repos):
    return QCManager(store, repos.molding_logs, repos.finished_goods, repos.raw_materials,
                     repos.products, repos.qc_entries)


def _counted_job(repos, name=GNT_PRODUCT_NAME, product_id=GNT_PRODUCT_ID, produced="1000"):
    return repos.molding_logs.add(MoldingLogEntity(
        job_id="JOB-T-1", order_id="doc-1", product_name=name, product_id=product_id,
        status=STEP_WAITING_COUNT, quantity_produced=Decimal(produced),
    ))


def test_pending_jobs_are_the_counted_ones(qc_manager, repos):
    job = _counted_job(repos)

    assert [j.id for j in qc_manager.get_pending_jobs()] == [job.id]


def test_finished_destination_stocks_goods_and_consumes_bom(qc_manager, repos):
    job = _counted_job(repos)

    result = qc_manager.process_job(job.id, QCDestination.FINISHED)

    assert repos.molding_logs.get_by_id(job.id).status == STEP_FINISHED
    assert repos.finished_goods.get_by_exact_name(GNT_PRODUCT_NAME).quantity == Decimal("1000")
    assert repos.raw_materials.get_by_id(ABS_ID).quantity == Decimal("955")
    assert repos.raw_materials.get_by_id(WHITE_ID).quantity == Decimal("49.1")
    assert result.deducted[ABS_ID] == Decimal("45")


def test_component_destination_creates_component_row(qc_manager, repos):
    job = _counted_job(repos, name="Breaker Housing", product_id=None, produced="200")

    result = qc_manager.process_job(job.id, "Component")

    component = repos.raw_materials.get_by_exact_name("Breaker Housing")
    assert component.category == InventoryCategory.COMPONENT.value
    assert component.quantity == Decimal("200")
    assert result.deducted == {}
    assert [c.name for c in repos.raw_materials.get_components()] == ["Breaker Housing"]


def test_deduction_stops_at_zero(qc_manager, repos):
    job = _counted_job(repos, produced="100000")

    qc_manager.process_job(job.id, QCDestination.FINISHED)

    assert repos.raw_materials.get_by_id(ABS_ID).quantity == Decimal("0")


def test_processed_job_cannot_be_processed_again(qc_manager, repos):
    job = _counted_job(repos)
    qc_manager.process_job(job.id, QCDestination.FINISHED)

    with pytest.raises(ValueError):
        qc_manager.process_job(job.id, QCDestination.FINISHED)


def test_failed_inspection_needs_reasons(qc_manager, repos):
    entry = repos.qc_entries.add(QCEntryEntity(product_name="Cap", quantity=Decimal("10")))

    with pytest.raises(ValueError):
        qc_manager.record_inspection(entry.id, QCStatus.FAILED, "Somchai")

    qc_manager.record_inspection(entry.id, QCStatus.FAILED, "Somchai", reasons=["สีเพี้ยน"])
    saved = repos.qc_entries.get_by_id(entry.id)
    assert saved.status == QCStatus.FAILED
    assert saved.reasons == ["สีเพี้ยน"]
    assert qc_manager.get_entries(QCStatus.FAILED)[0].id == entry.id
