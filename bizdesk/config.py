"""
Configuration module for bizdesk.

Contains constants, settings, and configuration values used throughout the application.
"""

import os
from pathlib import Path

# Version
VERSION = "0.1.0"

# Application paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
LOG_DIR = PROJECT_ROOT / "logs"

# Database configuration
DEFAULT_DB_PATH = DATA_DIR / "bizdesk.sqlite"
DB_TIMEOUT = 10.0  # seconds

# Query limits
TRANSACTION_LIST_LIMIT = 100
MAX_EXPORT_ENTRIES = 10000

# Reporting windows
COMPLIANCE_LOOKAHEAD_DAYS = 30
FORECAST_PROBABILITY_THRESHOLD = 70
DEFAULT_CHART_MONTHS = 6
MAX_CHART_MONTHS = 36

# Account used when an invoice payment is booked
SALES_ACCOUNT_NAME = "Sales"

# Export configuration
EXPORT_FORMATS = ["xlsx", "csv"]

# Chart generation
CHART_DPI = 150
CHART_FORMAT = "png"
CHART_WIDTH = 12
CHART_HEIGHT = 6

# Logging configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = LOG_DIR / "bizdesk.log"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Validation constraints
MIN_PROBABILITY = 0
MAX_PROBABILITY = 100
MAX_NAME_LENGTH = 200
MAX_NOTES_LENGTH = 5000

# Seed data, applied once to empty tables
DEFAULT_BUSINESS = ("AgoraX Media", "USD")

DEFAULT_SETTINGS = [
    ("business_name", "My Business"),
    ("address", "123 Main St, City, State"),
    ("phone", "555-1234"),
    ("email", "contact@example.com"),
    ("currency", "USD"),
]

# Error messages
ERROR_MESSAGES = {
    "database_error": "Database error occurred. Please try again.",
    "database_unavailable": "The database is temporarily unavailable.",
    "validation_error": "Invalid input. Please check your values and try again.",
    "not_found": "The requested record was not found.",
    "unknown_operation": "Unknown operation: {operation}",
    "internal_error": "An internal error occurred. Please try again.",
}


def ensure_directories():
    """Ensure required directories exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    LOG_DIR.mkdir(parents=True, exist_ok=True)


def get_db_path() -> Path:
    """Get the database path, honouring BIZDESK_DB_PATH."""
    override = os.getenv("BIZDESK_DB_PATH")
    return Path(override) if override else DEFAULT_DB_PATH


def get_log_level():
    """Get the configured log level."""
    import logging

    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get(LOG_LEVEL.upper(), logging.INFO)
