"""
The inventory aggregate.

Products live in an arena keyed by an integer handle. Two views sit on top of
it and always cover the same set of products:

- the sequence, a list of handles whose order is what listing and sorting expose
- the index, a mapping of SKU to handle used for lookups

Sorting only reorders the handle list, so the index never has to be rebuilt.
"""

import itertools
import logging
from pathlib import Path
from typing import Callable, Iterator, Optional, Union

from . import parsers, settings
from .products import Product
from .utils import contains_ignore_case, equals_ignore_case

logger = logging.getLogger(__name__)


class Inventory:
    """
    Owns every product added to it. A product handed to `add_product` belongs
    to the inventory from then on; references returned by lookups and
    searches stay valid only until the product is removed or cleared.
    """

    def __init__(self, data_file_path: Union[str, Path] = settings.DATA_FILE) -> None:
        self._data_file_path = Path(data_file_path)
        self._records: dict[int, Product] = {}
        self._order: list[int] = []
        self._index: dict[str, int] = {}
        self._handles = itertools.count()

    # Two inventories must never share products.
    def __copy__(self):
        raise TypeError("Inventory owns its products and cannot be copied.")

    def __deepcopy__(self, memo):
        raise TypeError("Inventory owns its products and cannot be copied.")

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[Product]:
        return (self._records[handle] for handle in self._order)

    def __contains__(self, sku: object) -> bool:
        return sku in self._index

    @property
    def products(self) -> list[Product]:
        """Products in current sequence order."""
        return list(self)

    @property
    def data_file_path(self) -> Path:
        return self._data_file_path

    def set_data_file_path(self, path: Union[str, Path]) -> None:
        self._data_file_path = Path(path)

    # --- CRUD ---

    def add_product(self, product: Optional[Product]) -> bool:
        """
        Stores the product. Returns False, without taking the product, when
        it is None or its SKU is already present.
        """
        if product is None:
            return False
        if product.sku in self._index:
            logger.debug(f"Rejected duplicate SKU '{product.sku}'.")
            return False

        handle = next(self._handles)
        self._records[handle] = product
        self._order.append(handle)
        self._index[product.sku] = handle
        return True

    def remove_product(self, sku: str) -> bool:
        handle = self._index.pop(sku, None)
        if handle is None:
            return False
        self._order.remove(handle)
        del self._records[handle]
        return True

    def update_product(
        self,
        sku: str,
        name: Optional[str] = None,
        price: Optional[float] = None,
        quantity: Optional[int] = None,
    ) -> bool:
        """
        Updates the given fields through the product's validated setters.
        Omitted fields (None, or an empty name) are left alone. A value the
        product rejects is logged and skipped; the call still succeeds as
        long as the SKU exists.
        """
        product = self.get_product(sku)
        if product is None:
            return False

        if name and not product.set_name(name):
            logger.warning(f"⚠️ Name {name!r} rejected for '{sku}', kept '{product.name}'.")
        if price is not None and not product.set_price(price):
            logger.warning(f"⚠️ Price {price} rejected for '{sku}', kept {product.price}.")
        if quantity is not None and not product.set_quantity(quantity):
            logger.warning(f"⚠️ Quantity {quantity} rejected for '{sku}', kept {product.quantity}.")
        return True

    def get_product(self, sku: str) -> Optional[Product]:
        handle = self._index.get(sku)
        if handle is None:
            return None
        return self._records[handle]

    # --- Search ---

    def _filter(self, predicate: Callable[[Product], bool]) -> list[Product]:
        return [product for product in self if predicate(product)]

    def search_by_name(self, term: str) -> list[Product]:
        return self._filter(lambda p: contains_ignore_case(p.name, term))

    def search_by_category(self, term: str) -> list[Product]:
        return self._filter(lambda p: contains_ignore_case(p.category, term))

    def search_by_type(self, product_type: str) -> list[Product]:
        return self._filter(lambda p: equals_ignore_case(p.product_type, product_type))

    def low_stock(self, threshold: int = settings.LOW_STOCK_THRESHOLD) -> list[Product]:
        """Products with fewer than `threshold` units, in sequence order."""
        return self._filter(lambda p: p.quantity < threshold)

    # --- Sorting ---

    def _sort(self, key: Callable[[Product], object], descending: bool = False) -> None:
        self._order.sort(key=lambda handle: key(self._records[handle]), reverse=descending)

    def sort_by_sku(self) -> None:
        self._sort(lambda p: p.sku)

    def sort_by_name(self) -> None:
        self._sort(lambda p: p.name)

    def sort_by_price(self) -> None:
        self._sort(lambda p: p.price)

    def sort_by_quantity(self) -> None:
        self._sort(lambda p: p.quantity)

    def sort_by_value(self) -> None:
        """Highest total value first."""
        self._sort(lambda p: p.total_value(), descending=True)

    # --- File I/O ---

    def save_to_file(self) -> bool:
        """
        Rewrites the data file with a comment header and one line per product,
        in sequence order. Returns False if the file cannot be written.
        """
        lines = settings.DATA_FILE_HEADER + [product.serialize() for product in self]
        try:
            with open(self._data_file_path, "w", encoding="utf-8", newline="\n") as f:
                f.write("\n".join(lines) + "\n")
        except OSError as e:
            logger.error(f"❌ Could not write inventory file {self._data_file_path}: {e}")
            return False

        logger.info(f"✅ Saved {len(self)} products to {self._data_file_path.name}")
        return True

    def load_from_file(self) -> bool:
        """
        Replaces the contents with the products stored in the data file.

        Returns False, leaving the inventory untouched, when the file cannot
        be read. That includes a missing file on a first run. Lines that cannot
        be turned into a product are dropped, as are repeats of a loaded SKU.
        """
        try:
            # utf-8-sig also reads files saved with a byte order mark
            with open(self._data_file_path, encoding="utf-8-sig") as f:
                lines = f.readlines()
        except FileNotFoundError:
            logger.info(f"INFO: No inventory file at {self._data_file_path}, starting empty.")
            return False
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"❌ Could not read inventory file {self._data_file_path}: {e}")
            return False

        self.clear_all()

        skipped = 0
        for line in lines:
            if not parsers.is_data_line(line):
                continue
            product = parsers.parse_line(line)
            if product is None:
                skipped += 1
                continue
            if not self.add_product(product):
                logger.warning(f"⚠️ Duplicate SKU '{product.sku}' in data file, keeping the first.")
                skipped += 1

        if skipped:
            logger.warning(f"⚠️ Skipped {skipped} unreadable lines in {self._data_file_path.name}")
        logger.info(f"Loaded {len(self)} products from {self._data_file_path.name}")
        return True

    # --- Utility ---

    def get_product_count(self) -> int:
        return len(self)

    def get_total_value(self) -> float:
        return sum((product.total_value() for product in self), 0.0)

    def is_empty(self) -> bool:
        return not self._order

    def sku_exists(self, sku: str) -> bool:
        return sku in self._index

    def clear_all(self) -> None:
        self._records.clear()
        self._order.clear()
        self._index.clear()
