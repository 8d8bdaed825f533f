# tests/test_bom_manager.py

from decimal import Decimal

import pytest

from conftest import ABS_ID, GNT_PRODUCT_ID, WHITE_ID
from factory_ops.business_logic.bom_manager import BomManager
from factory_ops.business_logic.product_manager import ProductManager


@pytest.fixture
def bom_manager(repos):
    return BomManager(repos.products, repos.raw_materials)


@pytest.fixture
def product_manager(repos):
    return ProductManager(repos.products)


def test_set_bom_replaces_lines_and_records_names(bom_manager):
    product = bom_manager.set_bom(GNT_PRODUCT_ID, [{"material_id": ABS_ID, "quantity_per_unit": "0.05"}])

    assert len(product.bom) == 1
    assert product.bom[0].material_name == "เม็ดพลาสติก ABS (เกรด GNT)"
    assert bom_manager.get_bom(GNT_PRODUCT_ID)[0].quantity_per_unit == Decimal("0.05")


def test_set_bom_rejects_bad_lines(bom_manager):
    with pytest.raises(ValueError):
        bom_manager.set_bom(GNT_PRODUCT_ID, [{"material_id": "unknown", "quantity_per_unit": 1}])
    with pytest.raises(ValueError):
        bom_manager.set_bom(GNT_PRODUCT_ID, [{"material_id": ABS_ID, "quantity_per_unit": -1}])
    with pytest.raises(ValueError):
        bom_manager.set_bom(GNT_PRODUCT_ID, [{"material_id": ABS_ID, "quantity_per_unit": 1},
                                            {"material_id": ABS_ID, "quantity_per_unit": 2}])


def test_component_product_cannot_consume_itself(bom_manager, product_manager):
    product = product_manager.create_product("Housing", creates_raw_material_id=ABS_ID)

    with pytest.raises(ValueError):
        bom_manager.set_bom(product.id, [{"material_id": ABS_ID, "quantity_per_unit": 1}])


def test_material_cost_per_unit(bom_manager):
    expected = Decimal("0.045") * Decimal("45.5") + Decimal("0.0009") * Decimal("120")

    assert bom_manager.calculate_material_cost(GNT_PRODUCT_ID) == expected


def test_required_materials_for_a_quantity(bom_manager):
    requirements = bom_manager.calculate_required_materials(GNT_PRODUCT_ID, Decimal("50000"))

    assert requirements[ABS_ID].needed == Decimal("2250")
    assert requirements[ABS_ID].is_shortage
    assert requirements[WHITE_ID].needed == Decimal("45")
    assert not requirements[WHITE_ID].is_shortage


def test_product_manager_validation(product_manager):
    with pytest.raises(ValueError):
        product_manager.create_product("GNT เบรคเกอร์ (สีขาว)")
    with pytest.raises(ValueError):
        product_manager.create_product("Cap", sale_price="-1")

    product = product_manager.create_product("Cap", cycle_time_seconds="12", sale_price="4.5")
    updated = product_manager.update_product(product.id, {"sale_price": "5", "bom": ["ignored"]})
    assert updated.sale_price == Decimal("5")
    assert updated.bom == []
    assert product_manager.resolve("Cap").id == product.id
    assert [p.name for p in product_manager.search_products("ca")] == ["Cap"]
