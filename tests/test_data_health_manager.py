# tests/test_data_health_manager.py

from decimal import Decimal

import pytest

from conftest import GNT_PRODUCT_ID
from factory_ops.business_logic.data_health_manager import DataHealthManager, ISSUE_CUSTOMER
from factory_ops.business_logic.entities import CustomerEntity


@pytest.fixture
def health_manager(repos):
    return DataHealthManager(repos.products, repos.customers, repos.raw_materials)


def test_scan_finds_missing_master_data(health_manager, repos):
    repos.customers.add(CustomerEntity(id="c1", name="ACME"))

    issues = {issue.id: issue for issue in health_manager.scan()}

    # seeded product has a price and a BOM but no cycle time
    assert f"p-cycle-{GNT_PRODUCT_ID}" in issues
    assert f"p-price-{GNT_PRODUCT_ID}" not in issues
    assert "c-phone-c1" in issues
    assert "c-contact-c1" in issues
    assert DataHealthManager.health_score(list(issues.values())) == 94


def test_apply_fix_updates_the_record(health_manager, repos):
    repos.customers.add(CustomerEntity(id="c1", name="ACME"))
    issue = next(i for i in health_manager.scan() if i.id == "c-phone-c1")

    health_manager.apply_fix(issue, " 081-000-0000 ")

    assert repos.customers.get_by_id("c1").phone == "081-000-0000"
    assert issue.type == ISSUE_CUSTOMER


def test_apply_fix_validates_numbers(health_manager, repos):
    issue = next(i for i in health_manager.scan() if i.field == "cycle_time_seconds")

    with pytest.raises(ValueError):
        health_manager.apply_fix(issue, "fast")
    with pytest.raises(ValueError):
        health_manager.apply_fix(issue, 0)

    health_manager.apply_fix(issue, "18")
    assert repos.products.get_by_id(GNT_PRODUCT_ID).cycle_time_seconds == Decimal("18")


def test_health_score_never_negative():
    assert DataHealthManager.health_score([object()] * 80) == 0
