# tests/test_production_manager.py

from decimal import Decimal

import pytest

from conftest import GNT_PRODUCT_ID, GNT_PRODUCT_NAME
from factory_ops.business_logic.entities import (
    MoldingLogEntity, ProductionDocumentEntity, ProductionDocumentItemEntity,
)
from factory_ops.business_logic.production_manager import ProductionManager
from factory_ops.constants import JobHealth, ProductionDocumentStatus


@pytest.fixture
def production_manager(repos, settings_manager):
    return ProductionManager(repos.molding_logs, repos.documents, repos.products, settings_manager)


def _document(repos, status, target="1000"):
    return repos.documents.add(ProductionDocumentEntity(
        doc_number=f"PO-{status.name}", status=status,
        items=[ProductionDocumentItemEntity(product_name=GNT_PRODUCT_NAME, product_id=GNT_PRODUCT_ID,
                                            quantity=Decimal(target))],
    ))


def _log(doc, produced):
    return MoldingLogEntity(job_id="JOB-1", order_id=doc.id, product_name=GNT_PRODUCT_NAME,
                            quantity_produced=Decimal(produced))


@pytest.mark.parametrize("progress, health", [
    (Decimal("0"), JobHealth.NOT_STARTED),
    (Decimal("45"), JobHealth.IN_PROGRESS),
    (Decimal("90"), JobHealth.NEAR_COMPLETION),
    (Decimal("100"), JobHealth.COMPLETED),
    (Decimal("130"), JobHealth.COMPLETED),
])
def test_classify_progress(progress, health):
    assert ProductionManager.classify_progress(progress) == health


def test_job_progress_sums_logs_of_the_line(production_manager, repos):
    doc = _document(repos, ProductionDocumentStatus.IN_PROGRESS)
    production_manager.add_log(_log(doc, "400"))
    production_manager.add_log(_log(doc, "520"))

    job = production_manager.get_job_progress()[0]

    assert job.total_produced == Decimal("920")
    assert job.progress == Decimal("92")
    assert job.health == JobHealth.NEAR_COMPLETION


def test_draft_documents_report_draft_health(production_manager, repos):
    _document(repos, ProductionDocumentStatus.DRAFT)

    assert production_manager.get_job_progress()[0].health == JobHealth.DRAFT


def test_log_status_must_be_a_configured_step(production_manager, repos):
    doc = _document(repos, ProductionDocumentStatus.APPROVED)
    log = production_manager.add_log(_log(doc, "0"))
    assert log.status == "รอฉีด"

    with pytest.raises(ValueError):
        production_manager.update_log(log.id, {"status": "dancing"})
    with pytest.raises(ValueError):
        production_manager.update_log(log.id, {"quantity_produced": "-3"})


def test_capacity_simulation_uses_product_then_default_cycle_time(production_manager, repos):
    result = production_manager.simulate_capacity(
        [{"product_id": GNT_PRODUCT_ID, "quantity": 2400}], machines=1, hours_per_day=Decimal("8"), target_days=1)

    # seeded product has no cycle time, so 15 s per unit
    assert result.total_seconds_required == Decimal("36000")
    assert result.capacity_seconds_per_day == Decimal("28800")
    assert result.days_needed == Decimal("1.25")
    assert result.is_overload
    assert result.percent_finishable == Decimal("80")
    assert result.units_finishable == 1920


def test_capacity_simulation_with_override_fits(production_manager):
    result = production_manager.simulate_capacity(
        [{"product_id": "any", "quantity": 100, "cycle_time": 36}], machines=2, hours_per_day=1, target_days=1)

    assert not result.is_overload
    assert result.percent_finishable == Decimal("100")
    assert result.units_finishable == 100


def test_remaining_work_skips_drafts_and_finished_lines(production_manager, repos):
    running = _document(repos, ProductionDocumentStatus.IN_PROGRESS)
    finished = _document(repos, ProductionDocumentStatus.APPROVED, target="100")
    _document(repos, ProductionDocumentStatus.DRAFT)
    production_manager.add_log(_log(running, "250"))
    production_manager.add_log(_log(finished, "100"))

    work = production_manager.remaining_work()

    assert work == [{"product_id": GNT_PRODUCT_ID, "quantity": Decimal("750")}]
    result = production_manager.simulate_capacity(work, machines=1, hours_per_day=Decimal("1"), target_days=1)
    assert result.total_seconds_required == Decimal("11250")
