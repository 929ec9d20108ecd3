"""
Product records held by the inventory.

Every record is a pydantic model so the non-negative numeric rules live in the
field definitions. Assignment is validated too, which lets the `set_*` helpers
reject a bad value and keep the previous one.

A record serializes to a single comma-delimited line whose first field is the
variant tag, e.g.:

    Physical,W1,Widget,10.000000,5,Hardware,2.500000,Acme
    Digital,D1,E-book,20.000000,2,Books,https://x.io/d1,3.200000,Single
"""

import logging
from abc import ABC, abstractmethod
from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import settings
from .utils import truncate

logger = logging.getLogger(__name__)

# Column widths used when rendering a record as a table row.
NAME_WIDTH = 22
CATEGORY_WIDTH = 12
LINK_WIDTH = 30


class Product(BaseModel, ABC):
    """
    Fields shared by every product variant. Never instantiated directly;
    variants provide `product_type` and the detail line shown under the row.
    """

    model_config = ConfigDict(validate_assignment=True)

    # Field order of a serialized line. The last field takes the rest of the line.
    line_fields: ClassVar[tuple[str, ...]] = (
        "product_type",
        "sku",
        "name",
        "price",
        "quantity",
        "category",
    )

    sku: str
    name: str
    price: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    quantity: int = Field(default=0, ge=0)
    category: str = "General"

    @classmethod
    def type_tag(cls) -> str:
        return cls.model_fields["product_type"].default

    # --- Setters ---

    def _assign(self, field_name: str, value: Any) -> bool:
        # Strict: setters take real values only, no bools or numeric strings.
        # A failed validated assignment leaves the model as it was.
        try:
            self.__pydantic_validator__.validate_assignment(self, field_name, value, strict=True)
        except ValidationError as e:
            logger.debug(
                f"Rejected {field_name}={value!r} for '{self.sku}': {e.errors()[0]['msg']}"
            )
            return False
        return True

    def set_name(self, name: str) -> bool:
        return self._assign("name", name)

    def set_category(self, category: str) -> bool:
        return self._assign("category", category)

    def set_price(self, price: float) -> bool:
        return self._assign("price", price)

    def set_quantity(self, quantity: int) -> bool:
        return self._assign("quantity", quantity)

    # --- Behaviour ---

    def total_value(self) -> float:
        return self.price * self.quantity

    def effective_discount(self, percentage: float) -> float:
        """Percentage actually applied once a valid request is made."""
        return percentage

    def apply_discount(self, percentage: float) -> float:
        """
        Returns the price after a percentage discount. The stored price is not
        changed. Percentages outside [0, 100] leave the price as it is.
        """
        if percentage < 0 or percentage > 100:
            return self.price
        return self.price * (1 - self.effective_discount(percentage) / 100.0)

    @abstractmethod
    def detail_line(self) -> str:
        """Variant specific line printed under the table row."""

    def display(self) -> str:
        row = (
            f"{self.sku:<12}"
            f"{truncate(self.name, NAME_WIDTH):<25}"
            f"${self.price:<11.2f}"
            f"{self.quantity:<10}"
            f"{truncate(self.category, CATEGORY_WIDTH):<15}"
            f"{self.product_type:<12}"
            f"${self.total_value():<14.2f}"
        )
        return f"{row}\n{self.detail_line()}"

    # --- Serialization ---

    def _line_values(self) -> list[str]:
        return [
            self.product_type,
            self.sku,
            self.name,
            f"{self.price:.6f}",
            str(self.quantity),
            self.category,
        ]

    def serialize(self) -> str:
        return ",".join(self._line_values())

    @classmethod
    def deserialize(cls, line: str) -> Optional["Product"]:
        """
        Builds a record from one data line. Returns None when the line does not
        match this variant or its values fail validation.
        """
        parts = line.rstrip("\r\n").split(",", len(cls.line_fields) - 1)
        if len(parts) != len(cls.line_fields) or parts[0] != cls.type_tag():
            return None

        try:
            # Numeric fields arrive as text; pydantic coerces them.
            return cls.model_validate(dict(zip(cls.line_fields, parts)))
        except ValidationError as e:
            logger.debug(f"Could not parse {cls.type_tag()} line {line!r}: {e}")
            return None


class PhysicalProduct(Product):
    """A shippable product with a weight and a supplier."""

    line_fields: ClassVar[tuple[str, ...]] = Product.line_fields + ("weight", "supplier")

    product_type: Literal["Physical"] = "Physical"
    weight: float = Field(default=0.0, ge=0, allow_inf_nan=False)  # lbs
    supplier: str = "Unknown"

    def set_weight(self, weight: float) -> bool:
        return self._assign("weight", weight)

    def set_supplier(self, supplier: str) -> bool:
        return self._assign("supplier", supplier)

    def shipping_cost(self) -> float:
        """Base rate plus a per-pound rate; weightless items pay the base rate."""
        if self.weight <= 0:
            return settings.SHIPPING_BASE_RATE
        return settings.SHIPPING_BASE_RATE + self.weight * settings.SHIPPING_PER_POUND_RATE

    def detail_line(self) -> str:
        return f"    -> Weight: {self.weight:.2f} lbs | Supplier: {self.supplier}"

    def _line_values(self) -> list[str]:
        return super()._line_values() + [f"{self.weight:.6f}", self.supplier]


class DigitalProduct(Product):
    """
    A downloadable product. Quantity counts available licenses.
    """

    line_fields: ClassVar[tuple[str, ...]] = Product.line_fields + (
        "download_link",
        "file_size_mb",
        "license_type",
    )

    product_type: Literal["Digital"] = "Digital"
    download_link: str = ""
    file_size_mb: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    license_type: str = "Single"

    def set_file_size(self, size_mb: float) -> bool:
        return self._assign("file_size_mb", size_mb)

    def set_download_link(self, link: str) -> bool:
        return self._assign("download_link", link)

    def set_license_type(self, license_type: str) -> bool:
        return self._assign("license_type", license_type)

    def effective_discount(self, percentage: float) -> float:
        # Digital goods get a bonus on every discount, up to a cap.
        return min(percentage + settings.DIGITAL_DISCOUNT_BONUS, settings.DIGITAL_DISCOUNT_CAP)

    def detail_line(self) -> str:
        return (
            f"    -> Size: {self.file_size_mb:.2f} MB | License: {self.license_type}"
            f" | Link: {truncate(self.download_link, LINK_WIDTH)}"
        )

    def _line_values(self) -> list[str]:
        return super()._line_values() + [
            self.download_link,
            f"{self.file_size_mb:.6f}",
            self.license_type,
        ]


# Tagged union over every concrete variant, dispatched on `product_type`.
AnyProduct = Annotated[
    Union[PhysicalProduct, DigitalProduct], Field(discriminator="product_type")
]
