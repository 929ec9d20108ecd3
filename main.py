import logging

from smallbiz import data_handler, reports, settings
from smallbiz.inventory import Inventory
from smallbiz.logger import setup_logger

logger = logging.getLogger("smallbiz")


def run_process():
    """Loads the inventory file, prints the reports, exports a snapshot and saves."""
    setup_logger("smallbiz")
    logger.info("--- Starting SmallBiz Inventory Report ---")

    inventory = Inventory(settings.DATA_FILE)
    if not inventory.load_from_file():
        logger.info(f"No existing data loaded from {settings.DATA_FILE.name}.")

    # 1. Current listing, in file order
    logger.info("\n--- Inventory ---")
    logger.info(reports.render_table(inventory))

    if inventory.is_empty():
        logger.info("\n--- Process Finished (nothing to report) ---")
        return

    # 2. Summary and low stock alert
    logger.info("")
    logger.info(reports.render_summary(reports.build_summary(inventory)))
    logger.info("")
    logger.info(reports.render_low_stock(inventory, settings.LOW_STOCK_THRESHOLD))

    # 3. Top value items (leaves the inventory sorted by value)
    logger.info(f"\n===== TOP {settings.TOP_VALUE_LIMIT} VALUE ITEMS =====")
    logger.info(reports.render_table(reports.top_value(inventory, settings.TOP_VALUE_LIMIT)))

    # 4. Export snapshot and persist the new order
    data_handler.save_outputs(inventory)
    if not inventory.save_to_file():
        logger.error("❌ Inventory file was not saved.")
        return

    logger.info("\n--- Process Finished Successfully ---")


if __name__ == "__main__":
    run_process()
