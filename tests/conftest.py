import pytest

from smallbiz.inventory import Inventory
from smallbiz.products import DigitalProduct, PhysicalProduct


@pytest.fixture
def widget():
    """A physical product worth 10 * 5 = 50."""
    return PhysicalProduct(
        sku="W1",
        name="Widget",
        price=10,
        quantity=5,
        category="Hardware",
        weight=2.5,
        supplier="Acme",
    )


@pytest.fixture
def ebook():
    """A digital product worth 20 * 2 = 40."""
    return DigitalProduct(
        sku="D1",
        name="E-book",
        price=20,
        quantity=2,
        category="Books",
        download_link="https://x.io/d1",
        file_size_mb=3.2,
        license_type="Single",
    )


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "inventory.csv"


@pytest.fixture
def inventory(data_file):
    return Inventory(data_file)


@pytest.fixture
def stocked(inventory, widget, ebook):
    """Inventory holding the widget and the e-book, in that order."""
    inventory.add_product(widget)
    inventory.add_product(ebook)
    return inventory


@pytest.fixture
def check_index():
    """Asserts every product in the sequence is exactly what a SKU lookup returns."""

    def check(inventory):
        for product in inventory:
            assert inventory.get_product(product.sku) is product
        assert len({p.sku for p in inventory}) == len(inventory)

    return check
