import logging
from typing import Optional

from .products import DigitalProduct, PhysicalProduct, Product

logger = logging.getLogger(__name__)

# --- Product Registry ---
# Maps the leading tag of a data line to the variant that can parse it.
# To support a new variant, add its class here.
PRODUCT_REGISTRY: dict[str, type[Product]] = {
    cls.type_tag(): cls for cls in (PhysicalProduct, DigitalProduct)
}


def known_types() -> list[str]:
    return list(PRODUCT_REGISTRY)


def is_data_line(line: str) -> bool:
    """Blank lines and '#' comments carry no record."""
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith("#")


def parse_line(line: str) -> Optional[Product]:
    """
    Dispatches a data line to the variant named by its first field.
    Unknown tags and malformed lines yield None.
    """
    tag = line.split(",", 1)[0]
    product_cls = PRODUCT_REGISTRY.get(tag)
    if product_cls is None:
        logger.debug(f"Skipping line with unknown type tag '{tag}'.")
        return None
    return product_cls.deserialize(line)
