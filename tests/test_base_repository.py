# tests/test_base_repository.py

from datetime import date
from decimal import Decimal

import pytest

from conftest import ABS_ID, GNT_PRODUCT_ID
from factory_ops.business_logic.entities import BomItemEntity, ProductEntity, PurchaseOrderEntity
from factory_ops.constants import Collection, PurchaseOrderStatus
from factory_ops.data_access.base_repository import entity_from_document, entity_to_document, to_camel_case


def test_to_camel_case():
    assert to_camel_case("cycle_time_seconds") == "cycleTimeSeconds"
    assert to_camel_case("name") == "name"


def test_entity_maps_to_camel_case_document():
    product = ProductEntity(
        id="p1", name="Cap", cycle_time_seconds=Decimal("12.5"), sale_price=Decimal("3"),
        bom=[BomItemEntity(material_id="m1", material_name="PP", quantity_per_unit=Decimal("0.02"))],
    )

    doc = entity_to_document(product)

    assert doc["id"] == "p1"
    assert doc["cycleTimeSeconds"] == 12.5
    assert doc["salePrice"] == 3
    assert doc["bom"] == [{"materialId": "m1", "materialName": "PP", "quantityPerUnit": 0.02}]
    assert "color" not in doc


def test_unknown_keys_survive_a_round_trip():
    row = {"id": "p1", "name": "Cap", "legacyCode": "X-1", "bom": []}

    product = entity_from_document(ProductEntity, row)
    assert product.extra == {"legacyCode": "X-1"}
    assert entity_to_document(product)["legacyCode"] == "X-1"


def test_missing_required_field_raises():
    with pytest.raises(ValueError):
        entity_from_document(ProductEntity, {"id": "p1"})


def test_enum_and_date_fields_are_parsed():
    po = entity_from_document(PurchaseOrderEntity, {
        "id": "po1", "poNumber": "PUR-1", "status": "Received", "orderDate": "2025-03-04",
        "items": [{"rawMaterialId": "m1", "quantity": 10, "unitPrice": 2.5}],
    })

    assert po.status == PurchaseOrderStatus.RECEIVED
    assert po.order_date == date(2025, 3, 4)
    assert po.items[0].unit_price == Decimal("2.5")


def test_seeded_product_reads_with_nested_bom(repos):
    product = repos.products.get_by_id(GNT_PRODUCT_ID)

    assert product.bom[0].material_id == ABS_ID
    assert product.bom[0].quantity_per_unit == Decimal("0.045")


def test_malformed_rows_are_skipped(store, repos):
    rows = store.get_collection(Collection.CUSTOMERS.value) + [{"id": "bad"}, {"id": "ok", "name": "ACME"}]
    store.replace_collection(Collection.CUSTOMERS.value, rows)

    assert [c.id for c in repos.customers.get_all()] == ["ok"]


def test_add_update_delete(repos):
    product = repos.products.add(ProductEntity(name="Lid"))
    assert product.id

    with pytest.raises(ValueError):
        repos.products.add(ProductEntity(id=product.id, name="Lid again"))

    product.sale_price = Decimal("9.5")
    assert repos.products.update(product) is product
    assert repos.products.get_by_id(product.id).sale_price == Decimal("9.5")
    assert repos.products.update(ProductEntity(id="ghost", name="x")) is None

    assert repos.products.delete(product.id)
    assert not repos.products.delete(product.id)


def test_find_by_criteria_operators(repos):
    for name, qty in (("A", 5), ("B", 50), ("C", 500)):
        repos.finished_goods.add(
            repos.finished_goods.model_type(name=name, quantity=Decimal(qty))
        )
    fg = repos.finished_goods

    assert {i.name for i in fg.find_by_criteria({"quantity": (">=", Decimal("50"))})} == {"B", "C"}
    assert {i.name for i in fg.find_by_criteria({"quantity": ("BETWEEN", (Decimal(1), Decimal(60)))})} == {"A", "B"}
    assert {i.name for i in fg.find_by_criteria({"name": ("IN", ["A", "C"])})} == {"A", "C"}
    with pytest.raises(ValueError):
        fg.find_by_criteria({"name": ("~", "A")})
