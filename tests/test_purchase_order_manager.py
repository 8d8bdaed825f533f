# tests/test_purchase_order_manager.py

from datetime import date
from decimal import Decimal

import pytest

from conftest import ABS_ID, WHITE_ID
from factory_ops.business_logic.entities import PurchaseOrderEntity, QuotationEntity, SupplierEntity
from factory_ops.business_logic.purchase_order_manager import PurchaseOrderManager
from factory_ops.constants import PurchaseOrderStatus


@pytest.fixture
def po_manager(store, repos):
    repos.suppliers.add(SupplierEntity(id="s1", name="Thai Resin"))
    repos.suppliers.add(SupplierEntity(id="s2", name="Color Co"))
    return PurchaseOrderManager(store, repos.purchase_orders, repos.raw_materials,
                                repos.suppliers, repos.quotations)


def _order(po_manager, items, supplier_id="s1"):
    po = po_manager.create_purchase_order(supplier_id=supplier_id, items_data=items)
    return po_manager.save_purchase_order(po)


def test_new_order_defaults_to_first_supplier(po_manager):
    po = po_manager.create_purchase_order()

    assert po.supplier_id == "s1"
    assert po.status == PurchaseOrderStatus.PENDING
    assert po.po_number == f"PUR-{date.today().year}001"
    assert po.expected_date > po.order_date


def test_save_validates_items(po_manager):
    with pytest.raises(ValueError):
        _order(po_manager, [])
    with pytest.raises(ValueError):
        _order(po_manager, [{"raw_material_id": ABS_ID, "quantity": "0", "unit_price": "1"}])
    with pytest.raises(ValueError):
        _order(po_manager, [{"raw_material_id": ABS_ID, "quantity": "abc"}])


def test_receive_stock_books_quantity_and_latest_price(po_manager, repos):
    po = _order(po_manager, [
        {"raw_material_id": ABS_ID, "quantity": "500", "unit_price": "47"},
        {"raw_material_id": WHITE_ID, "quantity": "10", "unit_price": "118.5"},
    ])

    received = po_manager.receive_stock(po.id)

    assert received.status == PurchaseOrderStatus.RECEIVED
    assert repos.purchase_orders.get_by_id(po.id).status == PurchaseOrderStatus.RECEIVED
    abs_material = repos.raw_materials.get_by_id(ABS_ID)
    assert abs_material.quantity == Decimal("1500")
    assert abs_material.cost_per_unit == Decimal("47")
    assert repos.raw_materials.get_by_id(WHITE_ID).quantity == Decimal("60")


def test_receiving_twice_is_rejected(po_manager, repos):
    po = _order(po_manager, [{"raw_material_id": ABS_ID, "quantity": "1", "unit_price": "1"}])
    po_manager.receive_stock(po.id)

    with pytest.raises(ValueError):
        po_manager.receive_stock(po.id)
    assert repos.raw_materials.get_by_id(ABS_ID).quantity == Decimal("1001")


def test_cancelled_order_cannot_be_received(po_manager):
    po = _order(po_manager, [{"raw_material_id": ABS_ID, "quantity": "1", "unit_price": "1"}])
    po.status = PurchaseOrderStatus.CANCELLED
    po_manager.save_purchase_order(po)

    with pytest.raises(ValueError):
        po_manager.receive_stock(po.id)


def test_calculate_total():
    po = PurchaseOrderEntity(po_number="x")
    po.items = [PurchaseOrderManager._item_from_data({"quantity": "2", "unit_price": "1.25"}),
                PurchaseOrderManager._item_from_data({"quantity": "3", "unit_price": "10"})]

    assert PurchaseOrderManager.calculate_total(po) == Decimal("32.50")


def test_only_one_preferred_quotation_per_material(po_manager):
    first = po_manager.save_quotation(QuotationEntity(
        raw_material_id=ABS_ID, supplier_id="s1", price_per_unit=Decimal("46"),
        lead_time_days=3, is_preferred=True))
    po_manager.save_quotation(QuotationEntity(
        raw_material_id=ABS_ID, supplier_id="s2", price_per_unit=Decimal("44"),
        lead_time_days=10, is_preferred=True))

    quotes = po_manager.get_quotations(ABS_ID)
    preferred = [q for q in quotes if q.is_preferred]
    assert len(quotes) == 2
    assert [q.supplier_id for q in preferred] == ["s2"]
    assert po_manager.best_price_quote(ABS_ID).supplier_id == "s2"
    assert po_manager.fastest_lead_time_quote(ABS_ID).id == first.id
    assert po_manager.best_price_quote("nothing") is None


def test_spend_summary_skips_cancelled_orders(po_manager):
    year = date.today().year
    _order(po_manager, [{"raw_material_id": ABS_ID, "quantity": "10", "unit_price": "5"}])
    _order(po_manager, [{"raw_material_id": WHITE_ID, "quantity": "2", "unit_price": "100"}], supplier_id="s2")
    cancelled = _order(po_manager, [{"raw_material_id": ABS_ID, "quantity": "1000", "unit_price": "5"}])
    cancelled.status = PurchaseOrderStatus.CANCELLED
    po_manager.save_purchase_order(cancelled)

    summary = po_manager.spend_summary(year)

    assert summary.total_orders == 2
    assert summary.total_spend == Decimal("250")
    assert summary.total_items == Decimal("12")
    assert list(summary.by_material) == [WHITE_ID, ABS_ID]
    assert summary.by_supplier["s2"]["name"] == "Color Co"
    assert summary.monthly[date.today().month - 1] == Decimal("250")
    assert po_manager.spend_summary(year - 1).total_orders == 0


def test_po_number_is_free_after_a_delete(po_manager):
    first = _order(po_manager, [{"raw_material_id": ABS_ID, "quantity": "1", "unit_price": "1"}])
    second = _order(po_manager, [{"raw_material_id": ABS_ID, "quantity": "1", "unit_price": "1"}])
    po_manager.delete_purchase_order(first.id)

    third = _order(po_manager, [{"raw_material_id": ABS_ID, "quantity": "1", "unit_price": "1"}])

    assert third.po_number == f"PUR-{date.today().year}003"
    assert third.po_number != second.po_number
