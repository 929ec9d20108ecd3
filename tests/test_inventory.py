"""
Unit tests for the Inventory aggregate: CRUD, search, sorting and utilities.
"""

import copy
import logging

import pytest

from smallbiz.inventory import Inventory
from smallbiz.products import DigitalProduct, PhysicalProduct


def make_physical(sku, name="Item", price=1.0, quantity=1, category="General"):
    return PhysicalProduct(sku=sku, name=name, price=price, quantity=quantity, category=category)


def make_digital(sku, name="Item", price=1.0, quantity=1, category="General"):
    return DigitalProduct(sku=sku, name=name, price=price, quantity=quantity, category=category)


@pytest.fixture
def catalog(inventory):
    """Five products with distinct SKUs, names, prices, quantities and values."""
    for product in [
        make_physical("C3", "red widget", price=2.0, quantity=30, category="Hardware"),
        make_digital("A1", "Manual PDF", price=15.0, quantity=3, category="Docs"),
        make_physical("E5", "Blue Widget", price=7.5, quantity=1, category="hardware-misc"),
        make_digital("B2", "Gizmo App", price=4.0, quantity=20, category="Software"),
        make_physical("D4", "Anvil", price=99.0, quantity=2, category="Heavy"),
    ]:
        assert inventory.add_product(product)
    return inventory


def skus(products):
    return [p.sku for p in products]


# --- CRUD ---


def test_new_inventory_is_empty(inventory):
    assert inventory.is_empty()
    assert len(inventory) == 0
    assert inventory.get_product_count() == 0
    assert inventory.get_total_value() == 0.0


def test_add_and_get(inventory, widget):
    assert inventory.add_product(widget) is True

    assert inventory.get_product("W1") is widget
    assert inventory.sku_exists("W1")
    assert "W1" in inventory
    assert not inventory.is_empty()


def test_add_none_rejected(inventory):
    assert inventory.add_product(None) is False
    assert inventory.is_empty()


def test_duplicate_sku_rejected_and_original_kept(inventory, widget):
    inventory.add_product(widget)
    impostor = make_digital("W1", name="Impostor", price=999)

    assert inventory.add_product(impostor) is False
    assert inventory.get_product("W1") is widget
    assert inventory.get_product("W1").name == "Widget"
    assert len(inventory) == 1


def test_get_missing_returns_none(inventory):
    assert inventory.get_product("nope") is None


def test_remove_product(stocked, check_index):
    assert stocked.remove_product("W1") is True

    assert stocked.get_product("W1") is None
    assert not stocked.sku_exists("W1")
    assert skus(stocked) == ["D1"]
    assert stocked.search_by_name("widget") == []
    assert stocked.search_by_type("physical") == []
    check_index(stocked)


def test_remove_missing_returns_false(stocked):
    assert stocked.remove_product("nope") is False
    assert len(stocked) == 2


def test_removed_sku_can_be_added_again(stocked):
    stocked.remove_product("W1")
    assert stocked.add_product(make_physical("W1", "Widget v2")) is True
    assert skus(stocked) == ["D1", "W1"]


def test_update_product_fields(stocked):
    assert stocked.update_product("W1", name="Gadget", price=12.5, quantity=3) is True

    product = stocked.get_product("W1")
    assert product.name == "Gadget"
    assert product.price == 12.5
    assert product.quantity == 3


def test_update_omitted_fields_untouched(stocked):
    assert stocked.update_product("W1", quantity=9) is True

    product = stocked.get_product("W1")
    assert product.name == "Widget"
    assert product.price == 10
    assert product.quantity == 9


def test_update_empty_name_is_ignored(stocked):
    stocked.update_product("W1", name="")
    assert stocked.get_product("W1").name == "Widget"


def test_update_rejected_values_are_skipped_and_logged(stocked, caplog):
    with caplog.at_level(logging.WARNING, logger="smallbiz.inventory"):
        assert stocked.update_product("W1", name="Gadget", price=-5, quantity=-1) is True

    product = stocked.get_product("W1")
    assert product.name == "Gadget"
    assert product.price == 10
    assert product.quantity == 5
    assert "Price -5 rejected" in caplog.text
    assert "Quantity -1 rejected" in caplog.text


def test_update_non_string_name_is_skipped_and_logged(stocked, caplog):
    with caplog.at_level(logging.WARNING, logger="smallbiz.inventory"):
        assert stocked.update_product("W1", name=123, price=12.5) is True

    product = stocked.get_product("W1")
    assert product.name == "Widget"
    assert product.price == 12.5
    assert "Name 123 rejected for 'W1'" in caplog.text


def test_update_missing_returns_false(stocked):
    assert stocked.update_product("nope", name="X") is False


def test_mutation_through_returned_reference_is_live(stocked):
    stocked.get_product("D1").set_quantity(10)
    assert stocked.get_total_value() == pytest.approx(50 + 200)


def test_clear_all(stocked):
    stocked.clear_all()

    assert stocked.is_empty()
    assert stocked.get_product("W1") is None
    assert stocked.products == []


def test_inventory_cannot_be_copied(stocked):
    with pytest.raises(TypeError):
        copy.copy(stocked)
    with pytest.raises(TypeError):
        copy.deepcopy(stocked)


def test_end_to_end_total_and_value_order(inventory):
    inventory.add_product(PhysicalProduct(sku="W1", name="Widget", price=10, quantity=5))
    inventory.add_product(DigitalProduct(sku="D1", name="Download", price=20, quantity=2))

    assert inventory.get_total_value() == pytest.approx(90.0)

    inventory.sort_by_value()
    assert skus(inventory) == ["W1", "D1"]


# --- Search ---


def test_search_by_name_is_case_insensitive_substring(catalog):
    assert skus(catalog.search_by_name("WIDGET")) == ["C3", "E5"]
    assert skus(catalog.search_by_name("app")) == ["B2"]
    assert catalog.search_by_name("sprocket") == []


def test_search_by_category(catalog):
    assert skus(catalog.search_by_category("hardware")) == ["C3", "E5"]
    assert skus(catalog.search_by_category("SOFT")) == ["B2"]


def test_search_by_type_is_exact(catalog):
    assert skus(catalog.search_by_type("physical")) == ["C3", "E5", "D4"]
    assert skus(catalog.search_by_type("DIGITAL")) == ["A1", "B2"]
    assert catalog.search_by_type("Phys") == []


def test_search_results_follow_current_order(catalog):
    catalog.sort_by_sku()
    assert skus(catalog.search_by_type("physical")) == ["C3", "D4", "E5"]


def test_search_returns_live_products(catalog):
    found = catalog.search_by_name("anvil")[0]
    assert found is catalog.get_product("D4")


def test_low_stock(catalog):
    assert skus(catalog.low_stock(3)) == ["E5", "D4"]
    assert catalog.low_stock(1) == []
    assert len(catalog.low_stock(100)) == 5


# --- Sorting ---


@pytest.mark.parametrize(
    "sort_name, expected",
    [
        ("sort_by_sku", ["A1", "B2", "C3", "D4", "E5"]),
        ("sort_by_name", ["D4", "E5", "B2", "A1", "C3"]),
        ("sort_by_price", ["C3", "B2", "E5", "A1", "D4"]),
        ("sort_by_quantity", ["E5", "D4", "A1", "B2", "C3"]),
        ("sort_by_value", ["D4", "B2", "C3", "A1", "E5"]),
    ],
)
def test_sort_orders(catalog, check_index, sort_name, expected):
    getattr(catalog, sort_name)()

    assert skus(catalog) == expected
    check_index(catalog)


def test_sort_by_value_is_descending(catalog):
    catalog.sort_by_value()
    values = [p.total_value() for p in catalog]
    assert all(a > b for a, b in zip(values, values[1:]))


def test_index_consistent_across_mutations(catalog, check_index):
    catalog.sort_by_price()
    catalog.remove_product("B2")
    catalog.add_product(make_digital("F6", "Late arrival"))
    catalog.sort_by_name()
    catalog.update_product("C3", quantity=0)
    catalog.sort_by_quantity()

    check_index(catalog)
    assert len(catalog) == 5
    assert catalog.get_product("B2") is None


def test_products_is_a_snapshot(catalog):
    products = catalog.products
    products.clear()
    assert len(catalog) == 5


def test_set_data_file_path(tmp_path):
    inventory = Inventory(tmp_path / "a.csv")
    inventory.set_data_file_path(str(tmp_path / "b.csv"))
    assert inventory.data_file_path == tmp_path / "b.csv"
