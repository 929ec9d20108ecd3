import logging
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter

from . import settings, utils
from .inventory import Inventory
from .products import AnyProduct
from .reports import to_dataframe

logger = logging.getLogger(__name__)

# Full records, variant fields included, tagged by `product_type`.
PRODUCT_LIST = TypeAdapter(list[AnyProduct])


def save_outputs(inventory: Inventory, output_dir: Optional[Path] = None) -> Optional[Path]:
    """
    Saves a dated snapshot of the inventory to CSV and conditionally to JSON.
    Returns the CSV path, or None when there was nothing to save or the
    write failed.
    """
    if inventory.is_empty():
        logger.warning("No data to save to disk.")
        return None

    output_dir = output_dir or settings.OUTPUT_DIR
    date_suffix = utils.get_date_suffix_for_filename()
    csv_path = output_dir / f"{settings.SNAPSHOT_FILENAME}_{date_suffix}.csv"
    json_path = output_dir / f"{settings.SNAPSHOT_FILENAME}_{date_suffix}.json"

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        to_dataframe(inventory).to_csv(csv_path, index=False)
        logger.info(f"✅ Inventory snapshot saved to: {csv_path}")

        if settings.SAVE_JSON_OUTPUT:
            json_path.write_bytes(PRODUCT_LIST.dump_json(inventory.products, indent=2))
            logger.info(f"✅ JSON output saved to: {json_path}")
        else:
            logger.info("INFO: Skipping JSON file save as per configuration.")
    except OSError as e:
        logger.error(f"❌ Error writing snapshot to {output_dir}: {e}")
        return None

    return csv_path
