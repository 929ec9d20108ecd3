import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
# Use Path objects for robust, OS-agnostic path handling.
DATA_FILE = BASE_DIR / os.getenv("INVENTORY_FILE", "inventory.csv")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# --- Snapshot Export ---
SNAPSHOT_FILENAME = os.getenv("SNAPSHOT_FILENAME", "inventory_snapshot")
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "false").lower() in ("1", "true", "yes")

# --- Shared Business Logic ---
# Products with fewer units than this are flagged by the low stock report.
LOW_STOCK_THRESHOLD = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))
TOP_VALUE_LIMIT = int(os.getenv("TOP_VALUE_LIMIT", "5"))

# Header written at the top of every data file. Lines starting with '#' are
# ignored on load.
DATA_FILE_HEADER = [
    "# SmallBiz Inventory Data File",
    "# Format: Type,SKU,Name,Price,Quantity,Category,[Type-specific fields]",
]

# Shipping model for physical products: base rate plus a per-pound rate.
SHIPPING_BASE_RATE = 5.99
SHIPPING_PER_POUND_RATE = 0.75

# Digital products get a bonus on top of any requested discount, capped.
DIGITAL_DISCOUNT_BONUS = 5.0
DIGITAL_DISCOUNT_CAP = 50.0
