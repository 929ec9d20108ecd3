"""
Text reports over an inventory: the product table, the summary block, and the
low stock alert. Also converts products into a pandas DataFrame for export
and aggregation.
"""

from typing import Iterable

import pandas as pd

from .inventory import Inventory
from .parsers import known_types
from .products import Product
from .schemas import InventorySummary, ProductRow, TypeBreakdown

TABLE_WIDTH = 100


def render_header() -> str:
    header = (
        f"{'SKU':<12}"
        f"{'Name':<25}"
        f"{'Price':<12}"
        f"{'Qty':<10}"
        f"{'Category':<15}"
        f"{'Type':<12}"
        f"{'Total Value':<15}"
    )
    return f"{header}\n{'-' * TABLE_WIDTH}"


def render_table(products: Iterable[Product]) -> str:
    """Full product listing with a totals footer, in the order given."""
    products = list(products)
    if not products:
        return "[!] Inventory is empty."

    total_value = sum(p.total_value() for p in products)
    lines = [render_header()]
    lines.extend(p.display() for p in products)
    lines.append("-" * TABLE_WIDTH)
    lines.append(f"Total Products: {len(products)} | Total Value: ${total_value:.2f}")
    return "\n".join(lines)


def to_dataframe(products: Iterable[Product]) -> pd.DataFrame:
    """One row per product, columns named after the ProductRow aliases."""
    columns = [info.alias for info in ProductRow.model_fields.values()]
    rows = [ProductRow.from_product(p).model_dump(by_alias=True) for p in products]
    return pd.DataFrame(rows, columns=columns)


def build_summary(inventory: Inventory) -> InventorySummary:
    df = to_dataframe(inventory)

    # Every known type is reported, even with no products of that kind.
    by_type = {tag: TypeBreakdown() for tag in known_types()}
    grouped = df.groupby("Type")["Total Value"].agg(["count", "sum"])
    for tag, row in grouped.iterrows():
        by_type[str(tag)] = TypeBreakdown(count=int(row["count"]), value=float(row["sum"]))

    return InventorySummary(
        total_products=len(df),
        total_value=float(df["Total Value"].sum()) if not df.empty else 0.0,
        by_type=by_type,
    )


def render_summary(summary: InventorySummary) -> str:
    lines = [
        "========== INVENTORY SUMMARY ==========",
        f"Total Products: {summary.total_products}",
    ]
    for tag, breakdown in summary.by_type.items():
        lines.append(f"  - {tag + ':':<10}{breakdown.count} (${breakdown.value:.2f})")
    lines.append(f"Total Inventory Value: ${summary.total_value:.2f}")
    lines.append("=" * 40)
    return "\n".join(lines)


def render_low_stock(inventory: Inventory, threshold: int) -> str:
    low = inventory.low_stock(threshold)
    lines = [f"===== LOW STOCK ALERT (Below {threshold} units) =====", render_header()]
    if low:
        lines.extend(p.display() for p in low)
    else:
        lines.append("[OK] No products are below the stock threshold.")
    lines.append("=" * 50)
    return "\n".join(lines)


def top_value(inventory: Inventory, limit: int) -> list[Product]:
    """
    The `limit` most valuable products. Leaves the inventory sorted by value,
    the same order the top value report displays.
    """
    inventory.sort_by_value()
    return inventory.products[:limit]
