# tests/test_material_requirements.py

import copy
from decimal import Decimal

from factory_ops.business_logic.entities import (
    BomItemEntity, InventoryItemEntity, ProductEntity,
    ProductionDocumentEntity, ProductionDocumentItemEntity,
)
from factory_ops.business_logic.material_requirements import (
    compute_requirements, has_shortage, resolve_product, shortages,
)
from factory_ops.constants import DEFAULT_UNIT


def _product(product_id, name, bom):
    return ProductEntity(
        id=product_id, name=name,
        bom=[BomItemEntity(material_id=m, material_name=f"name of {m}", quantity_per_unit=Decimal(str(q)))
             for m, q in bom],
    )


def _material(material_id, name, quantity, unit="kg"):
    return InventoryItemEntity(id=material_id, name=name, quantity=Decimal(str(quantity)), unit=unit)


def _order(*lines):
    return ProductionDocumentEntity(
        doc_number="PO-TEST",
        items=[ProductionDocumentItemEntity(product_name=name, product_id=pid, quantity=Decimal(str(qty)))
               for name, pid, qty in lines],
    )


def test_widget_scenario():
    products = [_product("w", "Widget", [("MatA", "0.5"), ("MatB", 2)])]
    materials = [_material("MatA", "Material A", 3), _material("MatB", "Material B", 30)]
    order = _order(("Widget", None, 10))

    result = compute_requirements(order, products, materials)

    assert set(result) == {"MatA", "MatB"}
    assert result["MatA"].needed == Decimal("5")
    assert result["MatA"].current == Decimal("3")
    assert result["MatA"].is_shortage
    assert result["MatB"].needed == Decimal("20")
    assert result["MatB"].current == Decimal("30")
    assert not result["MatB"].is_shortage
    assert has_shortage(result)


def test_needs_accumulate_across_line_items():
    products = [_product("p", "P", [("M1", 2)])]
    materials = [_material("M1", "M1", 100)]
    order = _order(("P", None, 3), ("P", None, 5))

    result = compute_requirements(order, products, materials)

    assert result["M1"].needed == Decimal("16")


def test_one_line_fans_out_to_every_bom_material():
    products = [_product("p", "P", [("M1", 1), ("M2", "0.25"), ("M3", 4)])]
    materials = [_material(m, m, 1000) for m in ("M1", "M2", "M3")]

    result = compute_requirements(_order(("P", None, 8)), products, materials)

    assert len(result) == 3
    assert result["M1"].needed == Decimal("8")
    assert result["M2"].needed == Decimal("2")
    assert result["M3"].needed == Decimal("32")


def test_equal_need_and_stock_is_not_a_shortage():
    products = [_product("p", "P", [("M1", 1)])]
    materials = [_material("M1", "M1", 100)]

    exact = compute_requirements(_order(("P", None, 100)), products, materials)
    assert not has_shortage(exact)
    assert exact["M1"].shortage == Decimal("0")

    over = compute_requirements(_order(("P", None, "100.01")), products, materials)
    assert has_shortage(over)
    assert over["M1"].shortage == Decimal("0.01")


def test_float_quantities_are_taken_at_face_value():
    product = ProductEntity(id="p", name="P", bom=[BomItemEntity(material_id="M1", quantity_per_unit=0.1)])
    materials = [InventoryItemEntity(id="M1", name="M1", quantity=100.0)]
    order = ProductionDocumentEntity(
        doc_number="PO-TEST", items=[ProductionDocumentItemEntity(product_name="P", quantity=1000.0)])

    result = compute_requirements(order, [product], materials)

    assert result["M1"].needed == Decimal("100.0")
    assert not has_shortage(result)


def test_unknown_product_contributes_nothing():
    products = [_product("p", "P", [("M1", 1)])]
    materials = [_material("M1", "M1", 10)]

    result = compute_requirements(_order(("Ghost", "no-such-id", 5)), products, materials)

    assert result == {}
    assert not has_shortage(result)


def test_unknown_material_reports_zero_stock():
    products = [_product("p", "P", [("missing", 1)])]

    result = compute_requirements(_order(("P", None, 2)), products, [])

    req = result["missing"]
    assert req.current == Decimal("0")
    assert req.name == "name of missing"
    assert req.unit == DEFAULT_UNIT
    assert req.is_shortage


def test_repeated_calls_give_identical_results_and_leave_inputs_alone():
    products = [_product("p", "P", [("M1", 2), ("M2", 1)])]
    materials = [_material("M1", "M1", 5), _material("M2", "M2", 50)]
    order = _order(("P", None, 4), ("P", None, 1))
    before = copy.deepcopy((order, products, materials))

    first = compute_requirements(order, products, materials)
    second = compute_requirements(order, products, materials)

    assert first == second
    assert first is not second
    assert (order, products, materials) == before


def test_product_name_wins_over_id():
    by_name = _product("id-1", "Alpha", [("M1", 1)])
    by_id = _product("id-2", "Beta", [("M2", 1)])

    assert resolve_product("Alpha", "id-2", [by_name, by_id]) is by_name
    assert resolve_product("Renamed", "id-2", [by_name, by_id]) is by_id
    assert resolve_product(None, None, [by_name, by_id]) is None


def test_line_resolved_by_id_when_name_is_stale():
    products = [_product("p", "Current Name", [("M1", 3)])]
    materials = [_material("M1", "M1", 100)]

    result = compute_requirements(_order(("Old Name", "p", 2)), products, materials)

    assert result["M1"].needed == Decimal("6")


def test_zero_and_negative_quantities_are_skipped():
    products = [_product("p", "P", [("M1", 1)])]
    materials = [_material("M1", "M1", 1)]

    result = compute_requirements(_order(("P", None, 0), ("P", None, -5)), products, materials)

    assert result == {}


def test_product_without_bom_needs_nothing():
    products = [_product("p", "P", [])]

    assert compute_requirements(_order(("P", None, 1000)), products, []) == {}


def test_shortages_are_sorted_largest_first():
    products = [_product("p", "P", [("M1", 1), ("M2", 10), ("M3", 1)])]
    materials = [_material("M1", "M1", 0), _material("M2", "M2", 0), _material("M3", "M3", 100)]

    result = compute_requirements(_order(("P", None, 5)), products, materials)

    assert [r.material_id for r in shortages(result)] == ["M2", "M1"]
