from pydantic import BaseModel, ConfigDict, Field

from .products import Product


class ProductRow(BaseModel):
    """
    Defines the data contract for a single row of an exported inventory snapshot.
    Field aliases are the column headers a spreadsheet user sees.
    """

    # Allows building rows from field names while exporting with the friendly aliases.
    model_config = ConfigDict(populate_by_name=True)

    sku: str = Field(..., alias="SKU")
    name: str = Field(..., alias="Name")
    product_type: str = Field(..., alias="Type")
    category: str = Field(..., alias="Category")
    price: float = Field(default=0.0, ge=0, alias="Price")
    quantity: int = Field(default=0, ge=0, alias="Quantity")
    total_value: float = Field(default=0.0, ge=0, alias="Total Value")

    @classmethod
    def from_product(cls, product: Product) -> "ProductRow":
        return cls(
            sku=product.sku,
            name=product.name,
            product_type=product.product_type,
            category=product.category,
            price=product.price,
            quantity=product.quantity,
            total_value=product.total_value(),
        )


class TypeBreakdown(BaseModel):
    count: int = Field(default=0, ge=0)
    value: float = Field(default=0.0, ge=0)


class InventorySummary(BaseModel):
    """Headline numbers for the whole inventory, split by product type."""

    total_products: int = Field(default=0, ge=0)
    total_value: float = Field(default=0.0, ge=0)
    by_type: dict[str, TypeBreakdown] = Field(default_factory=dict)
