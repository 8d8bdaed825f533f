# tests/test_production_order_manager.py

from datetime import date
from decimal import Decimal

import pytest

from conftest import ABS_ID, GNT_PRODUCT_ID, GNT_PRODUCT_NAME, WHITE_ID
from factory_ops.business_logic.production_order_manager import ProductionOrderManager
from factory_ops.constants import (
    ProductionDocumentStatus, PurchaseOrderStatus, STEP_WAITING_MOLDING, UNASSIGNED_MACHINE,
)


@pytest.fixture
def order_manager(store, repos, settings_manager):
    return ProductionOrderManager(
        store=store,
        documents_repository=repos.documents,
        products_repository=repos.products,
        raw_materials_repository=repos.raw_materials,
        molding_logs_repository=repos.molding_logs,
        purchase_orders_repository=repos.purchase_orders,
        suppliers_repository=repos.suppliers,
        settings_manager=settings_manager,
    )


def _saved_document(order_manager, quantity):
    doc = order_manager.new_document(
        customer_name="ACME",
        items=[{"product_name": GNT_PRODUCT_NAME, "product_id": GNT_PRODUCT_ID, "quantity": quantity}],
    )
    return order_manager.save_document(doc)


def test_constructor_rejects_missing_dependencies(store):
    with pytest.raises(ValueError):
        ProductionOrderManager(store, None, None, None, None, None, None, None)


def test_new_document_is_an_unsaved_draft(order_manager):
    doc = order_manager.new_document(customer_name="ACME")

    assert doc.status == ProductionDocumentStatus.DRAFT
    assert doc.id is None
    assert doc.doc_number == f"PO-{date.today().year}001"


def test_document_numbers_continue_from_the_highest_of_the_year(order_manager):
    _saved_document(order_manager, 10)

    assert order_manager.next_doc_number() == f"PO-{date.today().year}002"
    assert order_manager.next_doc_number(date(2030, 1, 1)) == "PO-2030001"


def test_new_document_can_be_saved_after_a_delete(order_manager):
    first = _saved_document(order_manager, 10)
    second = _saved_document(order_manager, 10)
    order_manager.delete_document(first.id)

    third = _saved_document(order_manager, 10)

    assert third.doc_number == f"PO-{date.today().year}003"
    assert third.doc_number != second.doc_number


def test_item_due_date_accepts_iso_text(order_manager):
    doc = order_manager.new_document(items=[{"product_name": "X", "quantity": 1, "due_date": "2025-08-01"}])

    assert doc.items[0].due_date == date(2025, 8, 1)


def test_save_marks_material_shortage(order_manager):
    enough = _saved_document(order_manager, 1000)
    short = _saved_document(order_manager, 100000)

    assert enough.material_shortage is False
    assert short.material_shortage is True


def test_duplicate_document_number_is_rejected(order_manager):
    first = _saved_document(order_manager, 10)
    clash = order_manager.new_document(customer_name="Other")
    clash.doc_number = first.doc_number

    with pytest.raises(ValueError):
        order_manager.save_document(clash)


def test_approve_with_enough_stock_creates_jobs(order_manager, repos):
    doc = _saved_document(order_manager, 1000)
    logs_before = len(repos.molding_logs.get_all())

    result = order_manager.approve_document(doc.id)

    assert result.approved
    assert result.document.status == ProductionDocumentStatus.APPROVED
    assert repos.documents.get_by_id(doc.id).status == ProductionDocumentStatus.APPROVED
    assert len(result.created_logs) == 1
    log = result.created_logs[0]
    assert log.order_id == doc.id
    assert log.status == STEP_WAITING_MOLDING
    assert log.machine == UNASSIGNED_MACHINE
    assert log.target_quantity == Decimal("1000")
    assert log.job_id.startswith(f"JOB-{doc.doc_number}-")
    assert len(repos.molding_logs.get_all()) == logs_before + 1
    assert result.requirements[ABS_ID].needed == Decimal("45.000")
    assert result.requirements[WHITE_ID].needed == Decimal("0.9000")


def test_approve_with_shortage_moves_to_material_checking(order_manager, repos):
    doc = _saved_document(order_manager, 100000)
    logs_before = len(repos.molding_logs.get_all())

    result = order_manager.approve_document(doc.id)

    assert not result.approved
    assert result.created_logs == []
    assert repos.documents.get_by_id(doc.id).status == ProductionDocumentStatus.MATERIAL_CHECKING
    assert len(repos.molding_logs.get_all()) == logs_before


def test_material_checking_document_can_be_approved_after_restock(order_manager, repos):
    doc = _saved_document(order_manager, 100000)
    order_manager.approve_document(doc.id)

    for material in repos.raw_materials.get_all():
        material.quantity = Decimal("100000")
        repos.raw_materials.update(material)
    result = order_manager.approve_document(doc.id)

    assert result.approved
    assert repos.documents.get_by_id(doc.id).status == ProductionDocumentStatus.APPROVED


def test_approved_document_cannot_be_approved_again(order_manager):
    doc = _saved_document(order_manager, 10)
    order_manager.approve_document(doc.id)

    with pytest.raises(ValueError):
        order_manager.approve_document(doc.id)


def test_approve_unknown_document_raises(order_manager):
    with pytest.raises(ValueError):
        order_manager.approve_document("nope")


def test_purchase_request_adds_ten_percent_rounded_up(order_manager, repos):
    doc = _saved_document(order_manager, 100000)

    request = order_manager.create_purchase_request(doc.id, ABS_ID, Decimal("3500"))

    assert request.status == PurchaseOrderStatus.PENDING
    assert request.po_number.startswith(f"PR-{date.today().year}-")
    assert request.items[0].quantity == Decimal("3850")
    assert request.items[0].unit_price == Decimal("45.5")
    assert request.linked_production_doc_id == doc.id
    assert repos.documents.get_by_id(doc.id).purchase_request_id == request.id
    assert [po.id for po in repos.purchase_orders.get_by_linked_document(doc.id)] == [request.id]


def test_purchase_request_rounds_fractional_quantities_up(order_manager):
    doc = _saved_document(order_manager, 10)

    request = order_manager.create_purchase_request(doc.id, WHITE_ID, Decimal("10.01"))

    assert request.items[0].quantity == Decimal("12")


def test_purchase_request_needs_positive_quantity(order_manager):
    doc = _saved_document(order_manager, 10)

    with pytest.raises(ValueError):
        order_manager.create_purchase_request(doc.id, ABS_ID, Decimal("0"))


def test_search_matches_number_and_customer_with_paging(order_manager):
    for _ in range(12):
        _saved_document(order_manager, 1)
    other = order_manager.new_document(customer_name="Bangkok Plastics")
    order_manager.save_document(other)

    rows, total = order_manager.search_documents("bangkok")
    assert total == 1
    assert rows[0].customer_name == "Bangkok Plastics"

    page_two, total = order_manager.search_documents("acme", page=2, page_size=10)
    assert total == 12
    assert len(page_two) == 2


def test_attach_signed_document_stores_data_url(order_manager, repos):
    doc = _saved_document(order_manager, 1)

    order_manager.attach_signed_document(doc.id, b"\x89PNG", "image/png")

    assert repos.documents.get_by_id(doc.id).signed_image_url.startswith("data:image/png;base64,")
    with pytest.raises(ValueError):
        order_manager.attach_signed_document(doc.id, b"text", "text/plain")
