"""
Configuration module for ledgerbook.

Contains constants, settings, and configuration values used throughout the application.
"""

import logging
import os
from decimal import Decimal
from pathlib import Path

# Version
VERSION = "0.1.0"

# Database configuration
DB_PATH_ENV_VAR = "LEDGERBOOK_DB_PATH"
DEFAULT_DB_DIR = Path.home() / ".ledgerbook"
DEFAULT_DB_FILENAME = "ledgerbook.db"

# Books
DEFAULT_BOOK_NAME = "Default Book"

# Ledger arithmetic
BALANCE_EPSILON = Decimal("0.01")

# Category names containing any of these (case-insensitive) are debit-normal
# unless the category stores an explicit side.
DEBIT_NORMAL_CATEGORY_KEYWORDS = (
    "asset",
    "expense",
    "parties",
    "cash",
    "gold and silver",
    "vc",
    "other",
    "rr",
)

# Highlights
HIGHLIGHT_COLORS = ("yellow", "blue", "green")

# Recycle bin
RECYCLE_RETENTION_DAYS = 30

# Logging configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_ENV_VAR = "LEDGERBOOK_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def get_database_path() -> str:
    """Return database path from the environment or the default location.

    The default directory is created if it does not exist.
    """
    database_path = os.environ.get(DB_PATH_ENV_VAR)
    if database_path:
        return database_path

    DEFAULT_DB_DIR.mkdir(exist_ok=True)
    return str(DEFAULT_DB_DIR / DEFAULT_DB_FILENAME)


def get_log_level(level_name: str | None = None) -> int:
    """Resolve a logging level name, falling back to the environment.

    Args:
        level_name: Level name such as "INFO"; None reads LEDGERBOOK_LOG_LEVEL

    Returns:
        Numeric logging level (unknown names map to WARNING)
    """
    if level_name is None:
        level_name = os.getenv(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)
    level = logging.getLevelName(level_name.strip().upper())
    if isinstance(level, int):
        return level
    return logging.WARNING
