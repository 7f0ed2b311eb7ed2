"""Configuration module - loads settings from .env file."""

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# A missing .env is fine: every key below has a default.
if not load_dotenv():
    logger.debug(".env file not found, using environment and defaults")


def _get_optional(key: str) -> str | None:
    """Get env var stripped; empty or missing becomes None."""
    value = os.getenv(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse_bool(value: str | None) -> bool:
    """Parse string to bool; default False for missing/invalid."""
    if not value:
        return False
    return value.strip().lower() in ("true", "1", "yes", "on")


def _parse_timeout(value: str | None) -> float | None:
    """Parse timeout seconds; missing, empty or non-positive means no timeout."""
    if not value or not value.strip():
        return None
    seconds = float(value.strip())
    return seconds if seconds > 0 else None


# Print service endpoint
PRINT_SERVICE_URL: str = os.getenv("PRINT_SERVICE_URL", "http://localhost:8000").strip().rstrip("/")
PRINT_SERVICE_TIMEOUT: float | None = _parse_timeout(os.getenv("PRINT_SERVICE_TIMEOUT"))

# Builder defaults
PRINTER_NAME: str = os.getenv("PRINTER_NAME", "").strip()
PRINTER_KEY: str | None = _get_optional("PRINTER_KEY")
PRINTER_TEXT_SPECIAL: bool = _parse_bool(os.getenv("PRINTER_TEXT_SPECIAL", "false"))
PRINTER_TEXT_ASIAN: bool = _parse_bool(os.getenv("PRINTER_TEXT_ASIAN", "false"))

# Local image conversion (width in dots; 384 fits 58mm paper)
IMAGE_PRINT_WIDTH: int = int(os.getenv("IMAGE_PRINT_WIDTH", "384").strip())
IMAGE_DITHERING: bool = _parse_bool(os.getenv("IMAGE_DITHERING", "true"))

# Logging
LOG_FILE: str = os.getenv("LOG_FILE", "logs/app.log").strip()
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()
